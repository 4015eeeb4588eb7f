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

"""Custom exceptions for the reference schema checker."""

from typing import Optional


class CheckerError(Exception):
    """Base exception for schema-check related errors."""
    pass


class ConfigurationError(CheckerError):
    """Exception raised for an incomplete or inconsistent check configuration."""
    pass


class SchemaLoadError(CheckerError):
    """Exception raised when a schema resource is missing, unreadable or invalid.

    This points at a broken repository layout rather than a bad document, so it
    is never handled per file.
    """
    pass


class DocumentParseError(CheckerError):
    """Exception raised when a YAML document cannot be parsed.

    Args:
        message: Parser message
        line: Optional 1-based line of the failure
        column: Optional 1-based column of the failure
    """

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
