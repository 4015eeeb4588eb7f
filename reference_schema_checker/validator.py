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

"""JSON Schema validation of parsed reference documents."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from jsonschema.exceptions import ValidationError
from jsonschema.protocols import Validator

from .yaml_parser import SourceMap, escape_json_pointer_token


JsonPointer = str


@dataclass(frozen=True)
class Violation:
    """A single schema violation found in a document."""
    instance_path: JsonPointer
    schema_path: str
    keyword: str
    params: Any
    message: str
    line: Optional[int] = None  # 1-based

    def to_dict(self) -> Dict[str, Any]:
        record = {
            "instancePath": self.instance_path,
            "schemaPath": self.schema_path,
            "keyword": self.keyword,
            "params": self.params,
            "message": self.message,
        }
        if self.line is not None:
            record["line"] = self.line
        return record


def _to_pointer(tokens: Iterable[Any]) -> JsonPointer:
    return "".join(f"/{escape_json_pointer_token(str(t))}" for t in tokens)


def _lookup_line(source_map: Optional[SourceMap], pointer: JsonPointer) -> Optional[int]:
    if not source_map:
        return None
    # Fall back to the closest ancestor that has a location (e.g. missing keys).
    while True:
        entry = source_map.get(pointer)
        if entry:
            return entry.get("line")
        if not pointer:
            return None
        pointer = pointer.rsplit("/", 1)[0]


def _to_violation(error: ValidationError, source_map: Optional[SourceMap]) -> Violation:
    instance_path = _to_pointer(error.absolute_path)
    return Violation(
        instance_path=instance_path,
        schema_path="#" + _to_pointer(error.absolute_schema_path),
        keyword=str(error.validator),
        params=error.validator_value,
        message=error.message,
        line=_lookup_line(source_map, instance_path),
    )


def validate_document(
    validator: Validator,
    data: Any,
    source_map: Optional[SourceMap] = None,
) -> List[Violation]:
    """Validate parsed data, returning every violation (empty when valid).

    The list is ordered by instance path, then schema path, then message so
    that repeated runs report identically.
    """
    violations = [_to_violation(e, source_map) for e in validator.iter_errors(data)]
    violations.sort(key=lambda v: (v.instance_path, v.schema_path, v.message))
    return violations


def serialize_violations(violations: Iterable[Violation]) -> str:
    """Render violations as an indented JSON list for messages and comments."""
    return json.dumps([v.to_dict() for v in violations], indent=2, ensure_ascii=False, default=str)
