"""Unit tests for the placeholder catalog."""

from __future__ import annotations

import pytest

from chapternamer.variables import (
    VariableContext,
    VariableDefinition,
    VariableRegistry,
    variables_for,
)


@pytest.mark.unit
def test_file_name_catalog_order() -> None:
    names = [definition.name for definition in variables_for(VariableContext.FILE_NAME)]
    assert names == [
        "Series",
        "Chapter",
        "Chapter:000",
        "Volume",
        "Provider",
        "Scanlator",
        "Language",
        "Title",
        "Year",
        "Month",
        "Day",
    ]


@pytest.mark.unit
def test_folder_catalog_tokens() -> None:
    registry = VariableRegistry()
    assert registry.names_for(VariableContext.FOLDER) == ["{Series}", "{Type}", "{Provider}", "{Language}", "{Year}"]
    assert all(definition.context is VariableContext.FOLDER for definition in registry.variables_for(VariableContext.FOLDER))


@pytest.mark.unit
def test_definitions_carry_descriptions() -> None:
    chapter = variables_for(VariableContext.FILE_NAME)[2]
    assert chapter.token == "{Chapter:000}"
    assert chapter.description == "Chapter with padding"


@pytest.mark.unit
def test_extended_registry_appends_without_changing_original() -> None:
    registry = VariableRegistry()
    group = VariableDefinition(name="Group", description="Release group", context=VariableContext.FOLDER)

    extended = registry.extended(group)

    assert extended.names_for(VariableContext.FOLDER)[-1] == "{Group}"
    assert "{Group}" not in registry.names_for(VariableContext.FOLDER)
    assert len(extended) == len(registry) + 1
    assert extended.variables_for(VariableContext.FILE_NAME) == registry.variables_for(VariableContext.FILE_NAME)


@pytest.mark.unit
def test_extended_registry_replaces_same_name_in_place() -> None:
    registry = VariableRegistry()
    series = VariableDefinition(name="series", description="Series name", context=VariableContext.FOLDER)

    extended = registry.extended(series)

    assert extended.variables_for(VariableContext.FOLDER)[0] == series
    assert len(extended) == len(registry)


@pytest.mark.unit
def test_unknown_placeholders_reports_typos_once() -> None:
    registry = VariableRegistry()
    template = "{series} {Chapter:0000} {Seires} {Seires} {Chapter:x}"

    assert registry.unknown_placeholders(template, VariableContext.FILE_NAME) == ["{Seires}", "{Chapter:x}"]


@pytest.mark.unit
def test_unknown_placeholders_respects_context() -> None:
    registry = VariableRegistry()

    assert registry.unknown_placeholders("{Type}/{Series}", VariableContext.FOLDER) == []
    assert registry.unknown_placeholders("{Series}/{Chapter:000}", VariableContext.FOLDER) == ["{Chapter:000}"]
    assert registry.unknown_placeholders("{Type}", VariableContext.FILE_NAME) == ["{Type}"]
