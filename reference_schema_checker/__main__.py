"""Module entrypoint for `python -m reference_schema_checker`.

Delegates to the checker CLI implementation.
"""

import sys

from .run_check import main


if __name__ == "__main__":
    sys.exit(main())
