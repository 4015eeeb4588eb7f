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

"""Reporting of check outcomes to logs, the requirements summary and review comments."""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Protocol, TextIO, Union

from .checker import CheckOutcome, Invalid, ParseFailed, Skipped
from .config import CheckConfig
from .schema_registry import relative_to_root
from .validator import serialize_violations

logger = logging.getLogger(__name__)

NO_ENTRY = "⛔"
REQUIRED_CHECK_MESSAGE = (
    "_This check is required: the pull request cannot be merged until it passes._"
)


class SubjectType:
    FILE = "file"


@dataclass(frozen=True)
class ReviewComment:
    """An inline review comment on a pull request."""
    body: str
    commit_id: str
    line: int
    path: str
    pull_number: Optional[int]
    repository: str
    subject_type: Optional[str] = None


class ReviewCommentService(Protocol):
    def create_pull_request_comment(self, comment: ReviewComment) -> None:
        ...


def _escape_annotation_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_annotation_property(value: str) -> str:
    return _escape_annotation_data(value).replace(":", "%3A").replace(",", "%2C")


class AnnotationCommentService:
    """Files review comments as GitHub Actions workflow annotations.

    The runner attaches ``::error`` lines to the changed file in the pull
    request view, so no API token is needed.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def create_pull_request_comment(self, comment: ReviewComment) -> None:
        stream = self.stream or sys.stdout
        properties = f"file={_escape_annotation_property(comment.path)}"
        if comment.subject_type != SubjectType.FILE:
            properties += f",line={comment.line}"
        properties += ",title=Requirement"
        print(f"::error {properties}::{_escape_annotation_data(comment.body)}", file=stream)


class RequirementsSummary:
    """Messages for every requirement that failed during the run."""

    def __init__(self):
        self._messages: List[str] = []

    def add(self, message: str) -> None:
        self._messages.append(message)

    @property
    def messages(self) -> List[str]:
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def render(self) -> str:
        if not self._messages:
            return ""
        header = f"Summary of requirements ({len(self._messages)} failed):"
        return "\n\n".join([header] + self._messages)


class Reporter:
    """Emit check outcomes.

    Failures are logged and added to the summary; when the configuration asks
    for it they are also filed as pull request comments.
    """

    def __init__(
        self,
        config: CheckConfig,
        summary: RequirementsSummary,
        comment_service: Optional[ReviewCommentService] = None,
    ):
        self.config = config
        self.summary = summary
        self.comment_service = comment_service
        self.repository_root = Path(config.repository_root).resolve()

    def report(self, outcome: CheckOutcome) -> None:
        if isinstance(outcome, ParseFailed):
            self._report_parse_error(outcome)
        elif isinstance(outcome, Invalid):
            self._report_violations(outcome)
        elif isinstance(outcome, Skipped):
            if outcome.api_type is None:
                logger.debug(f"No API type found for {outcome.file_path}")
            else:
                logger.debug(
                    f"No validator found for file {outcome.file_path} and API type {outcome.api_type}"
                )

    def _comments_enabled(self) -> bool:
        return self.config.post_pull_request_comments and self.comment_service is not None

    def _relative(self, path: Union[str, Path]) -> str:
        return relative_to_root(Path(path).resolve(), self.repository_root)

    def _report_parse_error(self, outcome: ParseFailed) -> None:
        error = outcome.error
        message = f"{NO_ENTRY} Requirement: In {outcome.file_path}, error parsing YAML: {error.message}"
        logger.error(message)
        self.summary.add(message)

        if not self._comments_enabled():
            return
        self._post(
            ReviewComment(
                body=f"Error parsing YAML: {error.message}\n\n{REQUIRED_CHECK_MESSAGE}",
                commit_id=self.config.commit_hash,
                line=error.line or 1,
                path=self._relative(outcome.file_path),
                pull_number=self.config.pull_request_number,
                repository=self.config.repository,
            )
        )

    def _report_violations(self, outcome: Invalid) -> None:
        schema_ref = self._relative(outcome.schema_path)
        details = serialize_violations(outcome.violations)
        message = (
            f"{NO_ENTRY} Requirement: In {outcome.file_path}, "
            f"error validating YAML against schema {schema_ref}:\n{details}"
        )
        logger.error(message)
        self.summary.add(message)

        if not self._comments_enabled():
            return
        self._post(
            ReviewComment(
                body=(
                    f"Error validating YAML against schema `{schema_ref}`:\n"
                    f"```json\n{details}\n```\n\n{REQUIRED_CHECK_MESSAGE}"
                ),
                commit_id=self.config.commit_hash,
                line=1,
                path=self._relative(outcome.file_path),
                pull_number=self.config.pull_request_number,
                repository=self.config.repository,
                subject_type=SubjectType.FILE,
            )
        )

    def _post(self, comment: ReviewComment) -> None:
        logger.debug(f"Filing review comment on {comment.path}:{comment.line}")
        self.comment_service.create_pull_request_comment(comment)
