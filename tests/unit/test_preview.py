"""Unit tests for preview rendering with the sample dataset."""

from __future__ import annotations

import pytest

from chapternamer.padding import PaddingPolicy
from chapternamer.preview import NamingSettings, SampleDataset, preview_file_name, preview_folder
from chapternamer.templating import OutputFormat


@pytest.mark.unit
def test_sample_dataset_uses_canonical_placeholder_keys() -> None:
    data = SampleDataset().as_data_source()

    assert data == {
        "Series": "One Piece",
        "Chapter": "1089",
        "Volume": "105",
        "Provider": "MangaDex",
        "Scanlator": "TCB Scans",
        "Language": "en",
        "Title": "The Decisive Battle",
        "Year": "2024",
        "Month": "01",
        "Day": "15",
        "Type": "Manga",
    }


@pytest.mark.unit
def test_with_values_matches_keys_case_insensitively() -> None:
    sample = SampleDataset().with_values(Chapter="7", series="Berserk")

    assert sample.chapter == "7"
    assert sample.series == "Berserk"
    assert SampleDataset().chapter == "1089"


@pytest.mark.unit
def test_with_values_rejects_unknown_fields() -> None:
    with pytest.raises(ValueError, match="what: unknown sample field\\(s\\): bogus.*how-to-fix"):
        SampleDataset().with_values(Bogus="x")


@pytest.mark.unit
def test_preview_file_name_with_default_style_template() -> None:
    settings = NamingSettings(file_name_template="[{Provider}][{Language}] {Series} {Chapter}")
    assert preview_file_name(settings, SampleDataset()) == "[MangaDex][en] One Piece 1089.cbz"


@pytest.mark.unit
def test_preview_folder_appends_separator() -> None:
    settings = NamingSettings(folder_template="{Type}/{Series}")
    assert preview_folder(settings, SampleDataset()) == "Manga/One Piece/"


@pytest.mark.unit
def test_preview_empty_templates_show_examples() -> None:
    settings = NamingSettings(output_format=OutputFormat.PDF)

    assert preview_file_name(settings, SampleDataset()) == "[MangaDex][en] One Piece 1089.pdf"
    assert preview_folder(settings, SampleDataset()) == "Manga/One Piece/"


@pytest.mark.unit
def test_preview_respects_title_flag() -> None:
    template = "{Series} {Chapter} - {Title}"

    with_title = NamingSettings(file_name_template=template, include_chapter_title=True)
    without_title = NamingSettings(file_name_template=template, include_chapter_title=False)

    assert preview_file_name(with_title, SampleDataset()) == "One Piece 1089 - The Decisive Battle.cbz"
    assert preview_file_name(without_title, SampleDataset()) == "One Piece 1089.cbz"


@pytest.mark.unit
def test_preview_volume_padding_with_custom_sample() -> None:
    settings = NamingSettings(file_name_template="{Series} v{Volume}", volume_padding=PaddingPolicy.WIDTH3)

    assert preview_file_name(settings, SampleDataset()) == "One Piece v105.cbz"
    assert preview_file_name(settings, SampleDataset().with_values(volume="5")) == "One Piece v005.cbz"


@pytest.mark.unit
def test_preview_auto_width_is_supplied_by_caller() -> None:
    settings = NamingSettings(file_name_template="{Chapter}", chapter_padding=PaddingPolicy.AUTO)
    sample = SampleDataset().with_values(chapter="7")

    assert preview_file_name(settings, sample) == "0007.cbz"
    assert preview_file_name(settings, sample, auto_width=3) == "007.cbz"
