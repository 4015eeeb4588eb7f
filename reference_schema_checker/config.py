# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Configuration management for the reference schema check."""

import os
import sys
import logging
from dataclasses import dataclass
from typing import Optional

from .exceptions import ConfigurationError

ENV_PREFIX = "REFERENCE_SCHEMA_CHECK_"
DEFAULT_SCHEMA_DIR = "tools/schemas/engine"


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: str = "false") -> bool:
    return (_env(name, default) or "").strip().lower() in ("1", "true", "yes", "on")


def _parse_pull_request_number(raw: Optional[str]) -> Optional[int]:
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"Pull request number must be an integer, got: {raw!r}") from exc


class _MaxLevelFilter(logging.Filter):
    def __init__(self, max_level: int) -> None:
        super().__init__()
        self._max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno <= self._max_level


@dataclass
class CheckConfig:
    """Configuration for a schema check run."""
    post_pull_request_comments: bool = False
    commit_hash: str = ""
    pull_request_number: Optional[int] = None
    repository: str = ""

    # paths
    repository_root: str = "."
    schema_dir: str = DEFAULT_SCHEMA_DIR

    log_level: str = "INFO"
    print_level: str = "ERROR"

    @classmethod
    def from_env(cls) -> 'CheckConfig':
        """Create configuration from environment variables.

        GitHub Actions defaults (GITHUB_SHA, GITHUB_REPOSITORY, GITHUB_WORKSPACE)
        are used when the prefixed variables are not set.
        """
        return cls(
            post_pull_request_comments=_env_flag('POST_PR_COMMENTS'),
            commit_hash=_env('COMMIT_HASH', os.getenv('GITHUB_SHA', '')),
            pull_request_number=_parse_pull_request_number(_env('PR_NUMBER')),
            repository=_env('REPOSITORY', os.getenv('GITHUB_REPOSITORY', '')),
            repository_root=_env('REPOSITORY_ROOT', os.getenv('GITHUB_WORKSPACE', '.')),
            schema_dir=_env('SCHEMA_DIR', DEFAULT_SCHEMA_DIR),
            log_level=_env('LOG_LEVEL', 'INFO'),
            print_level=_env('PRINT_LEVEL', 'ERROR'),
        )

    def validate(self) -> None:
        """Check that review comments can be addressed when they are requested."""
        if not self.post_pull_request_comments:
            return

        missing = []
        if not self.commit_hash:
            missing.append("commit hash")
        if self.pull_request_number is None:
            missing.append("pull request number")
        if not self.repository:
            missing.append("repository")
        if missing:
            raise ConfigurationError(
                f"Posting pull request comments requires: {', '.join(missing)}"
            )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration.

        DEBUG/INFO go to stdout, ``print_level`` and above go to stderr.
        """
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        stderr_level = max(getattr(logging, self.print_level.upper(), logging.ERROR), logging.DEBUG)
        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')

        root = logging.getLogger()
        root.handlers.clear()
        root.setLevel(level)

        stdout_handler = logging.StreamHandler(stream=sys.stdout)
        stdout_handler.setLevel(logging.DEBUG)
        stdout_handler.addFilter(_MaxLevelFilter(stderr_level - 1))
        stdout_handler.setFormatter(formatter)

        stderr_handler = logging.StreamHandler(stream=sys.stderr)
        stderr_handler.setLevel(stderr_level)
        stderr_handler.setFormatter(formatter)

        root.addHandler(stdout_handler)
        root.addHandler(stderr_handler)

        return logging.getLogger('reference_schema_checker')
