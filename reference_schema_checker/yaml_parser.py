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

"""YAML document parsing with source locations."""

import logging
import re
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from .exceptions import DocumentParseError

logger = logging.getLogger(__name__)

SourceMap = Dict[str, Dict[str, int]]

_BOOL_TAG = "tag:yaml.org,2002:bool"
_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class CoreSchemaLoader(yaml.SafeLoader):
    """SafeLoader resolving booleans and timestamps the YAML 1.2 core way.

    Plain scalars such as ``On``, ``No``, ``y`` or ``2024-01-01`` stay strings;
    only ``true``/``false`` (in lower, title or upper case) become booleans.
    """


CoreSchemaLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in (_BOOL_TAG, _TIMESTAMP_TAG)]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
CoreSchemaLoader.add_implicit_resolver(
    _BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


def escape_json_pointer_token(token: str) -> str:
    # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
    return token.replace("~", "~0").replace("/", "~1")


def _mark_position(exc: yaml.YAMLError) -> Tuple[Optional[int], Optional[int]]:
    mark = getattr(exc, "problem_mark", None) or getattr(exc, "context_mark", None)
    if mark is None:
        return None, None
    # PyYAML marks are 0-based
    return int(mark.line) + 1, int(mark.column) + 1


def parse_document(content: str) -> Any:
    """Parse YAML text.

    Malformed input is reported as :class:`DocumentParseError`, never as any
    other exception. An empty document parses to ``None``.

    Raises:
        DocumentParseError: If the content is not valid YAML
    """
    try:
        return yaml.load(content, Loader=CoreSchemaLoader)
    except yaml.YAMLError as exc:
        line, column = _mark_position(exc)
        raise DocumentParseError(str(exc), line=line, column=column) from exc


def build_source_map(content: str) -> SourceMap:
    """Build a mapping from JSON-pointer paths to 1-based line/column.

    This uses PyYAML's node tree (yaml.compose) so locations are tracked
    without changing the data shapes returned by parse_document.
    """
    source_map: SourceMap = {}

    try:
        root = yaml.compose(content, Loader=CoreSchemaLoader)
    except yaml.YAMLError:
        return source_map

    if root is None:
        return source_map

    def _walk(node, path: str) -> None:
        mark = node.start_mark
        source_map[path] = {"line": mark.line + 1, "column": mark.column + 1}

        if isinstance(node, yaml.nodes.MappingNode):
            for key_node, value_node in node.value:
                key = getattr(key_node, "value", None)
                if key is None:
                    continue
                _walk(value_node, f"{path}/{escape_json_pointer_token(str(key))}")
        elif isinstance(node, yaml.nodes.SequenceNode):
            for idx, item_node in enumerate(node.value):
                _walk(item_node, f"{path}/{idx}")

    _walk(root, "")
    return source_map


def read_document(file_path: Union[str, Path]) -> Tuple[Any, SourceMap]:
    """Read and parse a YAML file, returning (data, source_map).

    I/O and decoding failures propagate unchanged; only YAML syntax problems
    become :class:`DocumentParseError`.
    """
    path = Path(file_path)
    logger.debug(f"Reading document: {path}")
    content = path.read_text(encoding="utf-8")
    data = parse_document(content)
    return data, build_source_map(content)
