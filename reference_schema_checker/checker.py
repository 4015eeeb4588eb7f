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

"""Per-file schema check: decide the outcome, then report it.

Deciding is free of reporting side effects so it can be tested without a
review-comment service. Expected per-document problems (bad YAML, files
outside the reference tree, schema violations) come back as outcome values;
a broken schema or an unreadable input file raises.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, List, Optional, Union

from .exceptions import DocumentParseError
from .schema_loader import ValidatorCache
from .schema_registry import SchemaRegistry, get_api_type_from_path
from .validator import Violation, validate_document
from .yaml_parser import read_document

if TYPE_CHECKING:
    from .config import CheckConfig
    from .report import Reporter

logger = logging.getLogger(__name__)


class SkipReason:
    NO_API_TYPE = "no_api_type"
    NO_SCHEMA = "no_schema"


@dataclass(frozen=True)
class CheckOutcome:
    file_path: str

    @property
    def failed(self) -> bool:
        return False


@dataclass(frozen=True)
class ParseFailed(CheckOutcome):
    error: DocumentParseError = None

    @property
    def failed(self) -> bool:
        return True


@dataclass(frozen=True)
class Skipped(CheckOutcome):
    reason: str = SkipReason.NO_API_TYPE
    api_type: Optional[str] = None


@dataclass(frozen=True)
class Valid(CheckOutcome):
    api_type: str = ""
    schema_path: Optional[Path] = None


@dataclass(frozen=True)
class Invalid(CheckOutcome):
    api_type: str = ""
    schema_path: Optional[Path] = None
    violations: List[Violation] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return True


def decide_outcome(
    file_path: Union[str, Path],
    registry: SchemaRegistry,
    cache: ValidatorCache,
) -> CheckOutcome:
    """Parse, locate the schema for, and validate one reference file."""
    path_str = str(file_path)

    try:
        data, source_map = read_document(file_path)
    except DocumentParseError as e:
        return ParseFailed(path_str, error=e)

    api_type = get_api_type_from_path(path_str)
    if not api_type:
        return Skipped(path_str, reason=SkipReason.NO_API_TYPE)

    schema_path = registry.get(api_type)
    if schema_path is None:
        return Skipped(path_str, reason=SkipReason.NO_SCHEMA, api_type=api_type)

    validator = cache.get(api_type)
    violations = validate_document(validator, data, source_map)
    if violations:
        return Invalid(path_str, api_type=api_type, schema_path=schema_path, violations=violations)
    return Valid(path_str, api_type=api_type, schema_path=schema_path)


def check_yaml_schema(
    config: CheckConfig,
    file_path: Union[str, Path],
    registry: SchemaRegistry,
    cache: ValidatorCache,
    reporter: Reporter,
) -> CheckOutcome:
    """Check a single reference file and report the result.

    Returns normally for every expected outcome; the returned value tells the
    caller whether the file failed.
    """
    logger.debug(f"Checking {file_path} (post comments: {config.post_pull_request_comments})")
    outcome = decide_outcome(file_path, registry, cache)
    reporter.report(outcome)
    return outcome


def check_files(
    config: CheckConfig,
    file_paths: Iterable[Union[str, Path]],
    registry: SchemaRegistry,
    cache: ValidatorCache,
    reporter: Reporter,
) -> List[CheckOutcome]:
    """Check files one after another, in the given order."""
    return [check_yaml_schema(config, p, registry, cache, reporter) for p in file_paths]
