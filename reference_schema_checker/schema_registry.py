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

"""Mapping from reference file paths to API types and their JSON Schemas."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from types import MappingProxyType
from typing import List, Mapping, Optional, Union

from .config import DEFAULT_SCHEMA_DIR


class ApiType:
    """API reference record types, one per directory under reference/engine."""
    CLASSES = "classes"
    DATATYPES = "datatypes"
    ENUMS = "enums"
    GLOBALS = "globals"
    LIBRARIES = "libraries"

    @classmethod
    def get_all_types(cls) -> List[str]:
        return [cls.CLASSES, cls.DATATYPES, cls.ENUMS, cls.GLOBALS, cls.LIBRARIES]


_API_TYPE_RE = re.compile(r"reference/engine/([^/]+)/[^/]+\.yaml")


def get_api_type_from_path(file_path: Union[str, Path]) -> Optional[str]:
    """Extract the API type segment from ``.../reference/engine/<type>/<name>.yaml``.

    The segment is returned even if it is not a known type; the registry
    lookup decides whether a schema exists for it.
    """
    match = _API_TYPE_RE.search(str(file_path).replace("\\", "/"))
    if match and match.group(1):
        return match.group(1)
    return None


@dataclass(frozen=True)
class SchemaRegistry:
    """Read-only mapping from API type to schema file."""
    repository_root: Path
    schema_paths: Mapping[str, Path] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "schema_paths", MappingProxyType(dict(self.schema_paths)))

    def get(self, api_type: Optional[str]) -> Optional[Path]:
        if api_type is None:
            return None
        return self.schema_paths.get(api_type)

    def __contains__(self, api_type: object) -> bool:
        return api_type in self.schema_paths

    def relative(self, schema_path: Path) -> str:
        return relative_to_root(schema_path, self.repository_root)


def build_schema_registry(
    repository_root: Union[str, Path],
    schema_dir: str = DEFAULT_SCHEMA_DIR,
) -> SchemaRegistry:
    """Build the registry for every known API type under ``<root>/<schema_dir>``."""
    root = Path(repository_root).resolve()
    schema_root = root / schema_dir
    return SchemaRegistry(
        repository_root=root,
        schema_paths={api_type: schema_root / f"{api_type}.json" for api_type in ApiType.get_all_types()},
    )


def relative_to_root(path: Union[str, Path], repository_root: Union[str, Path]) -> str:
    """Render a path relative to the repository root, POSIX style.

    Paths outside the root are returned unchanged.
    """
    posix_path = PurePosixPath(str(path).replace("\\", "/"))
    root = PurePosixPath(str(repository_root).replace("\\", "/"))
    try:
        return str(posix_path.relative_to(root))
    except ValueError:
        return str(posix_path)
