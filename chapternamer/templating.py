"""Naming template rendering for chapter files and series folders."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from chapternamer.errors import format_user_error
from chapternamer.padding import VOLUME_POLICIES, PaddingPolicy, pad, pad_to_width

DEFAULT_AUTO_WIDTH = 4
DEFAULT_FILE_NAME_STEM = "[MangaDex][en] One Piece 1089"
DEFAULT_FOLDER = "Manga/One Piece/"

_TOKEN_PATTERN = re.compile(r"\{([^{}]+)\}")
_PADDED_CHAPTER_PATTERN = re.compile(r"chapter:([0-9]+)", re.IGNORECASE)
_FOLDER_SEPARATORS = ("/", "\\")

logger = logging.getLogger(__name__)


class OutputFormat(Enum):
    """Archive format a chapter is written as, with its file extension."""

    CBZ = (0, ".cbz")
    PDF = (1, ".pdf")

    def __init__(self, setting: int, extension: str) -> None:
        self.setting = setting
        self.extension = extension

    @classmethod
    def from_setting(cls, value: int | str) -> OutputFormat:
        """Map the stored ``outputFormat`` number (``0`` or ``1``) to a format."""
        for output_format in cls:
            if str(output_format.setting) == str(value).strip():
                return output_format
        raise ValueError(
            format_user_error(
                what=f"unknown output format '{value}'.",
                why="output format must be 0 (CBZ) or 1 (PDF)",
                how_to_fix="set the output format to 0 or 1",
            )
        )


class TargetKind(Enum):
    """Whether a template names a chapter file or a series folder."""

    FILE_NAME = "file-name"
    FOLDER = "folder"


@dataclass(slots=True)
class _Segment:
    """A run of rendered text.

    ``key`` names the data-source key a substituted value came from and
    ``placeholder`` holds the inner name of a token left unresolved.
    """

    text: str
    key: str | None = None
    placeholder: str | None = None
    explicit_width: bool = False


def _key_lookup(data_source: Mapping[str, str]) -> dict[str, str]:
    """Index data-source keys case-insensitively; the first spelling wins."""
    lookup: dict[str, str] = {}
    for key in data_source:
        lookup.setdefault(key.lower(), key)
    return lookup


def _substitute(template: str, data_source: Mapping[str, str], lookup: Mapping[str, str]) -> list[_Segment]:
    """Split ``template`` into literal text and substituted values in one scan."""
    segments: list[_Segment] = []
    cursor = 0
    for match in _TOKEN_PATTERN.finditer(template):
        if match.start() > cursor:
            segments.append(_Segment(template[cursor:match.start()]))
        key = lookup.get(match.group(1).lower())
        if key is None:
            segments.append(_Segment(match.group(0), placeholder=match.group(1)))
        else:
            segments.append(_Segment(str(data_source[key]), key=key))
        cursor = match.end()
    if cursor < len(template):
        segments.append(_Segment(template[cursor:]))
    return segments


def _resolve_padded_chapters(segments: list[_Segment], data_source: Mapping[str, str], chapter_key: str | None) -> None:
    """Replace leftover ``{Chapter:<digits>}`` tokens with an explicit-width chapter."""
    if chapter_key is None:
        return
    chapter = str(data_source[chapter_key])
    for segment in segments:
        if segment.placeholder is None:
            continue
        match = _PADDED_CHAPTER_PATTERN.fullmatch(segment.placeholder)
        if match is None:
            continue
        segment.text = pad_to_width(chapter, len(match.group(1)))
        segment.key = chapter_key
        segment.placeholder = None
        segment.explicit_width = True


def _apply_padding(segments: list[_Segment], key: str | None, policy: PaddingPolicy, fallback_width: int) -> None:
    if key is None:
        return
    for segment in segments:
        if segment.key == key and not segment.explicit_width:
            segment.text = pad(segment.text, policy, fallback_width)


def _strip_title_separator(text: str) -> str:
    """Trim trailing whitespace, one optional hyphen, then whitespace again."""
    text = text.rstrip()
    if text.endswith("-"):
        text = text[:-1]
    return text.rstrip()


def _drop_title(segments: list[_Segment], title_key: str | None) -> list[_Segment]:
    """Remove title spans and the separator written just before each one."""
    if title_key is None:
        return segments
    kept: list[_Segment] = []
    for segment in segments:
        if segment.key != title_key:
            kept.append(segment)
            continue
        if kept and kept[-1].key is None and kept[-1].placeholder is None:
            kept[-1].text = _strip_title_separator(kept[-1].text)
    return kept


def _finish(rendered: str, *, output_format: OutputFormat, target_kind: TargetKind) -> str:
    if target_kind is TargetKind.FOLDER:
        return rendered if rendered.endswith(_FOLDER_SEPARATORS) else f"{rendered}/"
    if rendered.endswith(output_format.extension):
        return rendered
    return f"{rendered}{output_format.extension}"


def default_preview(*, target_kind: TargetKind, output_format: OutputFormat = OutputFormat.CBZ) -> str:
    """Return the example shown while a template is still empty."""
    if target_kind is TargetKind.FOLDER:
        return DEFAULT_FOLDER
    return f"{DEFAULT_FILE_NAME_STEM}{output_format.extension}"


def render(
    template: str,
    data_source: Mapping[str, str],
    *,
    chapter_padding: PaddingPolicy = PaddingPolicy.AUTO,
    volume_padding: PaddingPolicy = PaddingPolicy.NONE,
    output_format: OutputFormat = OutputFormat.CBZ,
    include_title: bool = True,
    target_kind: TargetKind = TargetKind.FILE_NAME,
    auto_width: int = DEFAULT_AUTO_WIDTH,
) -> str:
    """Render a naming template against ``data_source``.

    Passes run in a fixed order: placeholder substitution, explicit
    ``{Chapter:<digits>}`` widths, chapter padding, volume padding, title
    removal, then the extension or trailing folder separator. Padding and
    title removal act on the recorded substitution spans, so a value that
    happens to equal the volume number or contain pattern characters is
    never touched by mistake.

    Unknown placeholders are kept verbatim and non-numeric chapter or volume
    values skip padding; this function does not raise for template content.

    Args:
        template: User-authored template, e.g. ``"{Series} {Chapter}"``.
        data_source: Placeholder name to value, e.g. a sample dataset.
        chapter_padding: Ambient chapter policy.
        volume_padding: Volume policy. ``AUTO`` and ``WIDTH4`` are not volume
            options and render like ``NONE``.
        output_format: Selects the extension appended to file names.
        include_title: When false, ``{Title}`` and its leading separator are removed.
        target_kind: File name or folder rendering rules.
        auto_width: Width used by ``PaddingPolicy.AUTO``, computed by the caller
            from the series' highest chapter number.

    Returns:
        The rendered file name or folder path.
    """
    if not template:
        return default_preview(target_kind=target_kind, output_format=output_format)

    lookup = _key_lookup(data_source)
    segments = _substitute(template, data_source, lookup)
    _resolve_padded_chapters(segments, data_source, lookup.get("chapter"))
    _apply_padding(segments, lookup.get("chapter"), chapter_padding, auto_width)
    if volume_padding not in VOLUME_POLICIES:
        volume_padding = PaddingPolicy.NONE
    _apply_padding(segments, lookup.get("volume"), volume_padding, auto_width)
    if not include_title:
        segments = _drop_title(segments, lookup.get("title"))

    rendered = _finish("".join(segment.text for segment in segments), output_format=output_format, target_kind=target_kind)
    logger.debug("Rendered %s template %r as %r", target_kind.value, template, rendered)
    return rendered
