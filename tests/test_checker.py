import pytest

from reference_schema_checker.checker import (
    Invalid,
    ParseFailed,
    SkipReason,
    Skipped,
    Valid,
    check_files,
    check_yaml_schema,
    decide_outcome,
)
from reference_schema_checker.exceptions import SchemaLoadError
from reference_schema_checker.report import Reporter, RequirementsSummary


def test_valid_enum(write_reference, registry, cache):
    path = write_reference("enums", "Foo", "values: [A, B]\n")

    outcome = decide_outcome(path, registry, cache)

    assert isinstance(outcome, Valid)
    assert outcome.api_type == "enums"
    assert not outcome.failed


def test_yaml_1_1_words_stay_strings(write_reference, registry, cache):
    path = write_reference("enums", "Switch", "values: [Off, On, Yes, No, 2024-01-01]\n")

    assert isinstance(decide_outcome(path, registry, cache), Valid)


def test_empty_enum_values_violate_min_items(write_reference, registry, cache):
    path = write_reference("enums", "Foo", "values: []\n")

    outcome = decide_outcome(path, registry, cache)

    assert isinstance(outcome, Invalid)
    assert outcome.failed
    assert [v.keyword for v in outcome.violations] == ["minItems"]
    assert outcome.violations[0].instance_path == "/values"
    assert outcome.schema_path == registry.get("enums")


def test_parse_error_stops_before_validation(write_reference, registry, cache):
    path = write_reference("enums", "Foo", "values: [A, B\n")

    outcome = decide_outcome(path, registry, cache)

    assert isinstance(outcome, ParseFailed)
    assert outcome.failed
    assert outcome.error.line is not None
    assert len(cache) == 0


def test_file_outside_reference_tree_is_skipped(docs_repo, registry, cache):
    path = docs_repo / "notes.yaml"
    path.write_text("anything: 1\n", encoding="utf-8")

    outcome = decide_outcome(path, registry, cache)

    assert isinstance(outcome, Skipped)
    assert outcome.reason == SkipReason.NO_API_TYPE
    assert not outcome.failed


def test_unknown_api_type_is_skipped_without_validation(write_reference, registry, cache):
    path = write_reference("widgets", "Foo", "name: 1\n")

    outcome = decide_outcome(path, registry, cache)

    assert isinstance(outcome, Skipped)
    assert outcome.reason == SkipReason.NO_SCHEMA
    assert outcome.api_type == "widgets"
    assert len(cache) == 0


def test_missing_schema_file_propagates(write_reference, registry, cache):
    path = write_reference("globals", "Foo", "name: Foo\n")

    with pytest.raises(SchemaLoadError):
        decide_outcome(path, registry, cache)


def test_unreadable_file_propagates(docs_repo, registry, cache):
    with pytest.raises(FileNotFoundError):
        decide_outcome(docs_repo / "reference" / "engine" / "enums" / "Gone.yaml", registry, cache)


def test_check_yaml_schema_reports_and_returns_outcome(config, write_reference, registry, cache, comment_service):
    summary = RequirementsSummary()
    reporter = Reporter(config, summary, comment_service)
    path = write_reference("classes", "Widget", "name: 5\n")

    outcome = check_yaml_schema(config, path, registry, cache, reporter)

    assert isinstance(outcome, Invalid)
    assert len(summary) == 1
    assert len(comment_service.comments) == 1


def test_check_files_keeps_order_and_reuses_validators(config, write_reference, registry, cache):
    reporter = Reporter(config, RequirementsSummary())
    paths = [
        write_reference("enums", "A", "values: [X]\n"),
        write_reference("enums", "B", "values: []\n"),
        write_reference("classes", "C", "name: C\n"),
    ]

    outcomes = check_files(config, paths, registry, cache, reporter)

    assert [type(o) for o in outcomes] == [Valid, Invalid, Valid]
    assert [o.file_path for o in outcomes] == [str(p) for p in paths]
    assert len(cache) == 2
