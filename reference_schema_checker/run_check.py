#!/usr/bin/env python3
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

"""CLI entry point for checking engine API reference files against their schemas."""

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

from .checker import CheckOutcome, Invalid, ParseFailed, Skipped, check_files
from .config import CheckConfig
from .exceptions import CheckerError
from .report import AnnotationCommentService, Reporter, RequirementsSummary
from .schema_loader import ValidatorCache
from .schema_registry import build_schema_registry

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_FATAL = 2


def find_yaml_files(paths: List[str]) -> List[Path]:
    """Find all YAML files in given paths."""
    yaml_files = []

    for path_str in paths:
        path = Path(path_str)

        if not path.exists():
            logger.warning(f"Path does not exist: {path}")
            continue

        if path.is_file():
            if path.suffix == '.yaml':
                yaml_files.append(path)
            else:
                logger.warning(f"File is not a .yaml file: {path}")
        elif path.is_dir():
            yaml_files.extend(p for p in path.rglob('*.yaml') if p.is_file())
        else:
            logger.warning(f"Path is neither file nor directory: {path}")

    return sorted(set(yaml_files))


def _outcome_record(outcome: CheckOutcome) -> Dict[str, Any]:
    record: Dict[str, Any] = {'file': outcome.file_path, 'failed': outcome.failed}
    if isinstance(outcome, ParseFailed):
        record['status'] = 'parse_error'
        record['message'] = outcome.error.message
        record['line'] = outcome.error.line
    elif isinstance(outcome, Skipped):
        record['status'] = 'skipped'
        record['reason'] = outcome.reason
    elif isinstance(outcome, Invalid):
        record['status'] = 'invalid'
        record['violations'] = [v.to_dict() for v in outcome.violations]
    else:
        record['status'] = 'valid'
    return record


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Check engine API reference YAML files against their JSON Schemas',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'paths',
        nargs='*',
        default=None,
        help='File paths or directories to check (default: <repository-root>/reference/engine)',
    )
    parser.add_argument(
        '--repository-root',
        default=None,
        help='Repository root used to locate schemas (default: current directory)',
    )
    parser.add_argument(
        '--schema-dir',
        default=None,
        help='Schema directory relative to the repository root (default: tools/schemas/engine)',
    )
    parser.add_argument(
        '--format',
        choices=['human', 'json', 'github-actions'],
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '--post-comments',
        action='store_true',
        default=None,
        help='File failures as pull request comments (workflow annotations)',
    )
    parser.add_argument('--commit', default=None, help='Commit hash the comments refer to')
    parser.add_argument('--pull-request', type=int, default=None, help='Pull request number')
    parser.add_argument('--repository', default=None, help='Repository as owner/name')
    parser.add_argument('--log-level', default=None, help='Log level (default: INFO)')
    return parser


def config_from_args(args: argparse.Namespace) -> CheckConfig:
    """Environment configuration overridden by explicit CLI arguments."""
    config = CheckConfig.from_env()
    if args.repository_root is not None:
        config.repository_root = args.repository_root
    if args.schema_dir is not None:
        config.schema_dir = args.schema_dir
    if args.post_comments is not None:
        config.post_pull_request_comments = args.post_comments
    if args.commit is not None:
        config.commit_hash = args.commit
    if args.pull_request is not None:
        config.pull_request_number = args.pull_request
    if args.repository is not None:
        config.repository = args.repository
    if args.log_level is not None:
        config.log_level = args.log_level
    return config


def main(argv: List[str] | None = None) -> int:
    """Main entry point for the checker CLI."""
    args = build_parser().parse_args(argv)

    try:
        config = config_from_args(args)
        config.set_logging()
        config.validate()
    except CheckerError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_FATAL

    if not args.paths:
        args.paths = [str(Path(config.repository_root) / 'reference' / 'engine')]

    yaml_files = find_yaml_files(args.paths)
    if not yaml_files:
        print("No reference YAML files found.", file=sys.stderr)
        return EXIT_FAILED

    registry = build_schema_registry(config.repository_root, config.schema_dir)
    cache = ValidatorCache(registry)
    summary = RequirementsSummary()
    # Workflow annotations need no pull request details, so the github-actions
    # format files them even when comments were not requested.
    report_config = config
    if args.format == 'github-actions':
        report_config = dataclasses.replace(config, post_pull_request_comments=True)
    reporter = Reporter(report_config, summary, AnnotationCommentService())

    try:
        outcomes = check_files(config, yaml_files, registry, cache, reporter)
    except (CheckerError, OSError, UnicodeDecodeError) as e:
        logger.error(f"Schema check aborted: {e}")
        return EXIT_FATAL

    failed = [o for o in outcomes if o.failed]
    if args.format == 'json':
        output = {
            'files': len(outcomes),
            'failed': len(failed),
            'skipped': sum(1 for o in outcomes if isinstance(o, Skipped)),
            'results': [_outcome_record(o) for o in outcomes],
        }
        print(json.dumps(output, indent=2, ensure_ascii=False, default=str))
    elif args.format == 'human':
        if summary:
            print(summary.render())
        else:
            print(f"Schema check succeeded for {len(outcomes)} file(s).")

    return EXIT_FAILED if failed else EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
