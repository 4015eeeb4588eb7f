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

"""Schema checks for engine API reference YAML files."""

__version__ = "0.1.0"

from .checker import CheckOutcome, check_files, check_yaml_schema, decide_outcome
from .config import CheckConfig
from .report import Reporter, RequirementsSummary
from .schema_loader import ValidatorCache
from .schema_registry import ApiType, build_schema_registry, get_api_type_from_path

__all__ = [
    'ApiType',
    'CheckConfig',
    'CheckOutcome',
    'Reporter',
    'RequirementsSummary',
    'ValidatorCache',
    'build_schema_registry',
    'check_files',
    'check_yaml_schema',
    'decide_outcome',
    'get_api_type_from_path',
]
