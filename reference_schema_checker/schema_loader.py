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

"""JSON Schema loading and compiled-validator cache."""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Union

import jsonschema
from jsonschema.exceptions import SchemaError
from jsonschema.protocols import Validator

from .exceptions import SchemaLoadError
from .schema_registry import SchemaRegistry

logger = logging.getLogger(__name__)


def load_schema(schema_path: Union[str, Path]) -> dict:
    """Load a JSON Schema file.

    Args:
        schema_path: Path to the schema file

    Returns:
        Schema dictionary

    Raises:
        SchemaLoadError: If the schema file is missing, unreadable or invalid JSON
    """
    path = Path(schema_path)
    if not path.is_file():
        raise SchemaLoadError(f"Schema file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            schema = json.load(f)
    except json.JSONDecodeError as e:
        raise SchemaLoadError(f"Invalid JSON in schema file {path}: {e.msg} (line {e.lineno})") from e
    except (OSError, UnicodeDecodeError) as e:
        raise SchemaLoadError(f"Failed to read schema file {path}: {e}") from e

    if not isinstance(schema, (dict, bool)):
        raise SchemaLoadError(f"Schema file {path} must contain a JSON object")
    return schema


def compile_schema(schema: Any, source: str = "<schema>") -> Validator:
    """Build a validator for a schema.

    The draft is taken from ``$schema``; schemas without one are treated as
    Draft 7.

    Raises:
        SchemaLoadError: If the schema itself is not a valid JSON Schema
    """
    validator_cls = jsonschema.validators.validator_for(schema, default=jsonschema.Draft7Validator)
    try:
        validator_cls.check_schema(schema)
    except SchemaError as e:
        raise SchemaLoadError(f"Invalid JSON Schema in {source}: {e.message}") from e
    return validator_cls(schema, format_checker=validator_cls.FORMAT_CHECKER)


class ValidatorCache:
    """Compiled validators keyed by API type, built on first use.

    Entries live for the whole process. The lock makes the first caller for a
    type compile it while concurrent callers wait and reuse the result.
    """

    def __init__(self, registry: SchemaRegistry):
        self.registry = registry
        self._validators: Dict[str, Validator] = {}
        self._lock = threading.Lock()

    def get(self, api_type: str) -> Validator:
        """Return the validator for an API type, compiling it if needed.

        Raises:
            KeyError: If the registry has no schema for the type
            SchemaLoadError: If the schema cannot be loaded or compiled
        """
        validator = self._validators.get(api_type)
        if validator is not None:
            return validator

        with self._lock:
            validator = self._validators.get(api_type)
            if validator is None:
                schema_path = self.registry.get(api_type)
                if schema_path is None:
                    raise KeyError(api_type)
                logger.debug(f"Compiling schema for {api_type}: {schema_path}")
                validator = compile_schema(load_schema(schema_path), source=self.registry.relative(schema_path))
                self._validators[api_type] = validator
        return validator

    def __contains__(self, api_type: object) -> bool:
        return api_type in self._validators

    def __len__(self) -> int:
        return len(self._validators)

    def clear(self) -> None:
        """Drop every compiled validator. Useful for testing."""
        with self._lock:
            self._validators.clear()
