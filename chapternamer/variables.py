"""Catalog of placeholders available to naming templates.

File-name and folder templates draw from different variable sets. The catalog
only documents what can be inserted; rendering works on whatever keys the
data source supplies.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

_TOKEN_PATTERN = re.compile(r"\{([^{}]+)\}")


class VariableContext(Enum):
    """Template kind a variable may appear in."""

    FILE_NAME = "file-name"
    FOLDER = "folder"


@dataclass(frozen=True, slots=True)
class VariableDefinition:
    """A placeholder name with its human-readable description."""

    name: str
    description: str
    context: VariableContext

    @property
    def token(self) -> str:
        """Return the placeholder as typed into a template, e.g. ``{Series}``."""
        return f"{{{self.name}}}"


def _defs(context: VariableContext, *entries: tuple[str, str]) -> tuple[VariableDefinition, ...]:
    return tuple(VariableDefinition(name=name, description=description, context=context) for name, description in entries)


FILE_NAME_VARIABLES = _defs(
    VariableContext.FILE_NAME,
    ("Series", "Series title"),
    ("Chapter", "Chapter number"),
    ("Chapter:000", "Chapter with padding"),
    ("Volume", "Volume number"),
    ("Provider", "Source provider"),
    ("Scanlator", "Scanlator group"),
    ("Language", "Language code"),
    ("Title", "Chapter title"),
    ("Year", "Year"),
    ("Month", "Month"),
    ("Day", "Day"),
)

FOLDER_VARIABLES = _defs(
    VariableContext.FOLDER,
    ("Series", "Series title"),
    ("Type", "Content type (Manga, Manhwa, etc.)"),
    ("Provider", "Source provider"),
    ("Language", "Language code"),
    ("Year", "Year"),
)


class VariableRegistry:
    """Immutable, ordered placeholder catalog partitioned by context."""

    __slots__ = ("_variables",)

    def __init__(self, definitions: tuple[VariableDefinition, ...] = FILE_NAME_VARIABLES + FOLDER_VARIABLES) -> None:
        self._variables = tuple(definitions)

    def variables_for(self, context: VariableContext) -> tuple[VariableDefinition, ...]:
        """Return the catalog entries for ``context`` in display order."""
        return tuple(definition for definition in self._variables if definition.context is context)

    def names_for(self, context: VariableContext) -> list[str]:
        """Return the insertable ``{Name}`` tokens for ``context``."""
        return [definition.token for definition in self.variables_for(context)]

    def extended(self, *definitions: VariableDefinition) -> VariableRegistry:
        """Return a new registry with ``definitions`` appended.

        A definition whose name already exists in the same context replaces
        the description in place, keeping the original position.
        """
        merged = list(self._variables)
        for definition in definitions:
            for position, existing in enumerate(merged):
                if existing.context is definition.context and existing.name.lower() == definition.name.lower():
                    merged[position] = definition
                    break
            else:
                merged.append(definition)
        return VariableRegistry(tuple(merged))

    def unknown_placeholders(self, template: str, context: VariableContext) -> list[str]:
        """List ``{...}`` tokens in ``template`` that the catalog does not define.

        ``{Chapter:<digits>}`` is accepted for any width when the context
        offers the padded chapter variable.
        """
        known = {definition.name.lower() for definition in self.variables_for(context)}
        unknown: list[str] = []
        for match in _TOKEN_PATTERN.finditer(template):
            name = match.group(1).lower()
            if name in known:
                continue
            if "chapter:000" in known and re.fullmatch(r"chapter:\d+", name):
                continue
            if match.group(0) not in unknown:
                unknown.append(match.group(0))
        return unknown

    def __len__(self) -> int:
        return len(self._variables)


def variables_for(context: VariableContext) -> tuple[VariableDefinition, ...]:
    """Return the built-in catalog for ``context``."""
    return VariableRegistry().variables_for(context)
