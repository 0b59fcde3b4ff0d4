"""Preview rendering of naming settings against an illustrative dataset."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace

from chapternamer.errors import format_user_error
from chapternamer.padding import PaddingPolicy
from chapternamer.templating import DEFAULT_AUTO_WIDTH, OutputFormat, TargetKind, render


@dataclass(frozen=True, slots=True)
class SampleDataset:
    """Illustrative chapter metadata used to preview templates."""

    series: str = "One Piece"
    chapter: str = "1089"
    volume: str = "105"
    provider: str = "MangaDex"
    scanlator: str = "TCB Scans"
    language: str = "en"
    title: str = "The Decisive Battle"
    year: str = "2024"
    month: str = "01"
    day: str = "15"
    type: str = "Manga"

    def as_data_source(self) -> dict[str, str]:
        """Return values keyed by their canonical placeholder names."""
        return {field.name.capitalize(): getattr(self, field.name) for field in fields(self)}

    def with_values(self, **overrides: str) -> SampleDataset:
        """Return a copy with placeholder values replaced.

        Keys are matched case-insensitively, so ``Series=...`` and
        ``series=...`` are equivalent.
        """
        known = {field.name for field in fields(self)}
        normalized = {key.lower(): value for key, value in overrides.items()}
        unknown = sorted(set(normalized) - known)
        if unknown:
            raise ValueError(
                format_user_error(
                    what=f"unknown sample field(s): {', '.join(unknown)}.",
                    why="sample values must map to a preview placeholder",
                    how_to_fix=f"use one of: {', '.join(sorted(known))}",
                )
            )
        return replace(self, **normalized)


@dataclass(frozen=True, slots=True)
class NamingSettings:
    """Naming options supplied by the settings layer."""

    file_name_template: str = ""
    folder_template: str = ""
    chapter_padding: PaddingPolicy = PaddingPolicy.AUTO
    volume_padding: PaddingPolicy = PaddingPolicy.NONE
    output_format: OutputFormat = OutputFormat.CBZ
    include_chapter_title: bool = False


def preview_file_name(settings: NamingSettings, sample: SampleDataset, *, auto_width: int = DEFAULT_AUTO_WIDTH) -> str:
    """Render the chapter file name template against ``sample``."""
    return render(
        settings.file_name_template,
        sample.as_data_source(),
        chapter_padding=settings.chapter_padding,
        volume_padding=settings.volume_padding,
        output_format=settings.output_format,
        include_title=settings.include_chapter_title,
        target_kind=TargetKind.FILE_NAME,
        auto_width=auto_width,
    )


def preview_folder(settings: NamingSettings, sample: SampleDataset, *, auto_width: int = DEFAULT_AUTO_WIDTH) -> str:
    """Render the series folder template against ``sample``."""
    return render(
        settings.folder_template,
        sample.as_data_source(),
        chapter_padding=settings.chapter_padding,
        volume_padding=settings.volume_padding,
        output_format=settings.output_format,
        include_title=settings.include_chapter_title,
        target_kind=TargetKind.FOLDER,
        auto_width=auto_width,
    )
