from pathlib import Path

import pytest

from reference_schema_checker.schema_registry import (
    ApiType,
    SchemaRegistry,
    build_schema_registry,
    get_api_type_from_path,
    relative_to_root,
)


@pytest.mark.parametrize("api_type", ApiType.get_all_types())
def test_api_type_extracted_from_reference_path(api_type):
    path = f"/work/docs/reference/engine/{api_type}/Foo.yaml"
    assert get_api_type_from_path(path) == api_type


@pytest.mark.parametrize(
    "path",
    [
        "reference/engine/Foo.yaml",
        "reference/engine/classes/Foo.json",
        "reference/scripting/classes/Foo.yaml",
        "docs/classes/Foo.yaml",
        "",
    ],
)
def test_api_type_missing_for_other_paths(path):
    assert get_api_type_from_path(path) is None


def test_api_type_handles_relative_and_windows_paths():
    assert get_api_type_from_path("reference/engine/enums/Foo.yaml") == "enums"
    assert get_api_type_from_path(r"C:\docs\reference\engine\globals\Foo.yaml") == "globals"


def test_unknown_api_type_has_no_schema(tmp_path):
    registry = build_schema_registry(tmp_path)
    api_type = get_api_type_from_path("reference/engine/widgets/Foo.yaml")

    assert api_type == "widgets"
    assert registry.get(api_type) is None
    assert api_type not in registry
    assert registry.get(None) is None


def test_registry_maps_every_known_type(tmp_path):
    registry = build_schema_registry(tmp_path)
    root = tmp_path.resolve()

    for api_type in ApiType.get_all_types():
        assert registry.get(api_type) == root / "tools" / "schemas" / "engine" / f"{api_type}.json"


def test_registry_is_read_only(tmp_path):
    registry = build_schema_registry(tmp_path)
    with pytest.raises(TypeError):
        registry.schema_paths["widgets"] = Path("widgets.json")


def test_registry_custom_schema_dir(tmp_path):
    registry = build_schema_registry(tmp_path, schema_dir="schemas")
    assert registry.get("classes") == tmp_path.resolve() / "schemas" / "classes.json"


def test_schema_path_rendered_relative_to_root():
    root = "/home/ci/repo"
    assert relative_to_root(f"{root}/tools/schemas/engine/classes.json", root) == "tools/schemas/engine/classes.json"


def test_path_outside_root_rendered_unchanged():
    assert relative_to_root("/elsewhere/classes.json", "/home/ci/repo") == "/elsewhere/classes.json"


def test_registry_relative(tmp_path):
    registry = SchemaRegistry(repository_root=tmp_path, schema_paths={"enums": tmp_path / "s" / "enums.json"})
    assert registry.relative(registry.get("enums")) == "s/enums.json"
