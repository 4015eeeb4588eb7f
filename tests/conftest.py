import json
import logging
from pathlib import Path
from typing import Callable, List

import pytest

from reference_schema_checker.config import CheckConfig
from reference_schema_checker.report import ReviewComment
from reference_schema_checker.schema_loader import ValidatorCache
from reference_schema_checker.schema_registry import build_schema_registry

ENUM_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["values"],
    "properties": {
        "values": {"type": "array", "items": {"type": "string"}, "minItems": 1},
    },
}

CLASS_SCHEMA = {
    "type": "object",
    "required": ["name"],
    "properties": {
        "name": {"type": "string"},
        "methods": {"type": "array", "items": {"type": "object", "required": ["name"]}},
    },
}


@pytest.fixture
def docs_repo(tmp_path: Path) -> Path:
    """A docs repository with schemas for enums and classes only."""
    root = tmp_path / "docs"
    schema_dir = root / "tools" / "schemas" / "engine"
    schema_dir.mkdir(parents=True)
    (schema_dir / "enums.json").write_text(json.dumps(ENUM_SCHEMA), encoding="utf-8")
    (schema_dir / "classes.json").write_text(json.dumps(CLASS_SCHEMA), encoding="utf-8")
    return root


@pytest.fixture
def write_reference(docs_repo: Path) -> Callable[[str, str, str], Path]:
    def _write(api_type: str, name: str, content: str) -> Path:
        path = docs_repo / "reference" / "engine" / api_type / f"{name}.yaml"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def registry(docs_repo: Path):
    return build_schema_registry(docs_repo)


@pytest.fixture
def cache(registry) -> ValidatorCache:
    return ValidatorCache(registry)


@pytest.fixture
def config(docs_repo: Path) -> CheckConfig:
    return CheckConfig(
        post_pull_request_comments=True,
        commit_hash="abc123",
        pull_request_number=42,
        repository="example/engine-docs",
        repository_root=str(docs_repo),
    )


class RecordingCommentService:
    def __init__(self):
        self.comments: List[ReviewComment] = []

    def create_pull_request_comment(self, comment: ReviewComment) -> None:
        self.comments.append(comment)


@pytest.fixture
def comment_service() -> RecordingCommentService:
    return RecordingCommentService()


@pytest.fixture(autouse=True)
def restore_root_logging():
    """The CLI reconfigures root logging; put it back after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
