"""Typed configuration model and merge/validation helpers for chapternamer."""

from __future__ import annotations

import copy
import logging
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Mapping

from chapternamer.errors import format_user_error
from chapternamer.padding import CHAPTER_POLICIES, VOLUME_POLICIES, PaddingPolicy
from chapternamer.preview import NamingSettings, SampleDataset
from chapternamer.templating import DEFAULT_AUTO_WIDTH, OutputFormat
from chapternamer.variables import VariableContext, VariableRegistry

_SECTIONS = ("naming", "preview")
_CAMEL_CASE_KEYS = {
    "fileNameTemplate": "file_name_template",
    "folderTemplate": "folder_template",
    "chapterPadding": "chapter_padding",
    "volumePadding": "volume_padding",
    "outputFormat": "output_format",
    "includeChapterTitle": "include_chapter_title",
    "autoWidth": "auto_width",
}


@dataclass(slots=True)
class NamingConfig:
    """Template and formatting options, stored as settings tokens."""

    file_name_template: str = "[{Provider}][{Language}] {Series} {Chapter}"
    folder_template: str = "{Type}/{Series}"
    chapter_padding: str = "auto"
    volume_padding: str = "0"
    output_format: int = 0
    include_chapter_title: bool = False


@dataclass(slots=True)
class PreviewConfig:
    """Inputs for previews that the naming settings do not carry."""

    auto_width: int = DEFAULT_AUTO_WIDTH
    sample: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class AppConfig:
    """Top-level typed config."""

    naming: NamingConfig
    preview: PreviewConfig


def default_config() -> AppConfig:
    """Build the default typed configuration."""
    return AppConfig(naming=NamingConfig(), preview=PreviewConfig())


def merge_typed_config(*, defaults: AppConfig, yaml_config: Mapping[str, Any], cli_args: Mapping[str, Any]) -> AppConfig:
    """Merge layered typed configuration with precedence defaults < YAML < CLI."""
    _validate_top_level_sections(yaml_config=yaml_config)
    _validate_top_level_sections(yaml_config=cli_args)

    merged_dict = _deep_merge(asdict(defaults), _normalize_keys(yaml_config))
    merged_dict = _deep_merge(merged_dict, _drop_none_values(_normalize_keys(cli_args)))

    merged = _dict_to_typed_config(merged_dict)
    validate_config_values(merged)
    return merged


def validate_config_values(config: AppConfig) -> None:
    """Validate enum-like settings tokens and preview inputs."""
    _validate_padding(
        name="naming.chapter_padding",
        token=config.naming.chapter_padding,
        allowed=CHAPTER_POLICIES,
    )
    _validate_padding(
        name="naming.volume_padding",
        token=config.naming.volume_padding,
        allowed=VOLUME_POLICIES,
    )
    OutputFormat.from_setting(config.naming.output_format)

    if not isinstance(config.naming.include_chapter_title, bool):
        raise ValueError(
            format_user_error(
                what="naming.include_chapter_title must be true or false.",
                why=f"got {config.naming.include_chapter_title!r}",
                how_to_fix="set include_chapter_title to true or false",
            )
        )

    for name in ("file_name_template", "folder_template"):
        if not isinstance(getattr(config.naming, name), str):
            raise ValueError(
                format_user_error(
                    what=f"naming.{name} must be a string.",
                    why="templates are plain text with {Name} placeholders",
                    how_to_fix=f"quote the value of {name} in your settings",
                )
            )

    auto_width = config.preview.auto_width
    if isinstance(auto_width, bool) or not isinstance(auto_width, int) or auto_width < 1:
        raise ValueError(
            format_user_error(
                what="preview.auto_width must be a positive integer.",
                why="auto padding needs the digit count of the highest chapter number",
                how_to_fix="set preview.auto_width to 1 or more",
            )
        )

    to_sample_dataset(config)


def to_naming_settings(config: AppConfig) -> NamingSettings:
    """Convert validated settings tokens into engine option types."""
    return NamingSettings(
        file_name_template=config.naming.file_name_template,
        folder_template=config.naming.folder_template,
        chapter_padding=PaddingPolicy.from_setting(config.naming.chapter_padding),
        volume_padding=PaddingPolicy.from_setting(config.naming.volume_padding),
        output_format=OutputFormat.from_setting(config.naming.output_format),
        include_chapter_title=config.naming.include_chapter_title,
    )


def to_sample_dataset(config: AppConfig) -> SampleDataset:
    """Build the preview dataset, applying configured overrides."""
    return SampleDataset().with_values(**{str(key): str(value) for key, value in config.preview.sample.items()})


def warn_on_unknown_placeholders(
    config: AppConfig,
    *,
    registry: VariableRegistry | None = None,
    logger: logging.Logger | None = None,
) -> list[str]:
    """Warn about template tokens the variable catalog does not define.

    Such tokens render verbatim, which usually points to a typo.
    """
    target_logger = logger or logging.getLogger(__name__)
    catalog = registry or VariableRegistry()
    warnings: list[str] = []
    checks = (
        ("naming.file_name_template", config.naming.file_name_template, VariableContext.FILE_NAME),
        ("naming.folder_template", config.naming.folder_template, VariableContext.FOLDER),
    )
    for field_path, template, context in checks:
        for token in catalog.unknown_placeholders(template, context):
            message = f"Unknown placeholder {token} in '{field_path}' will be kept verbatim."
            target_logger.warning(message)
            warnings.append(message)
    return warnings


def _validate_padding(*, name: str, token: Any, allowed: frozenset[PaddingPolicy]) -> None:
    """Ensure a padding token is a quoted string naming an allowed policy."""
    options = ", ".join(policy.value for policy in PaddingPolicy if policy in allowed)
    if not isinstance(token, str):
        raise ValueError(
            format_user_error(
                what=f"{name} must be a quoted string.",
                why=f"got {token!r}; unquoted YAML numbers lose leading zeros",
                how_to_fix=f"quote the value, one of: {options}",
            )
        )
    try:
        policy = PaddingPolicy.from_setting(token)
    except ValueError:
        policy = None
    if policy not in allowed:
        raise ValueError(
            format_user_error(
                what=f"{name} must be one of: {options}.",
                why=f"unsupported padding setting '{token}' was provided",
                how_to_fix=f"choose one of {options} in YAML or CLI override",
            )
        )


def _normalize_keys(values: Mapping[str, Any]) -> dict[str, Any]:
    """Translate settings-API camelCase keys into config field names."""
    normalized: dict[str, Any] = {}
    for section, content in values.items():
        if content is None:
            continue
        if isinstance(content, Mapping):
            normalized[section] = {_CAMEL_CASE_KEYS.get(key, key): value for key, value in content.items()}
        else:
            normalized[section] = content
    return normalized


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge mapping values where `override` wins."""
    merged: dict[str, Any] = copy.deepcopy(dict(base))
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _drop_none_values(values: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively remove explicit None values from override maps."""
    cleaned: dict[str, Any] = {}
    for key, value in values.items():
        if value is None:
            continue
        if isinstance(value, Mapping):
            nested = _drop_none_values(value)
            if nested:
                cleaned[key] = nested
            continue
        cleaned[key] = value
    return cleaned


def _validate_top_level_sections(*, yaml_config: Mapping[str, Any]) -> None:
    """Ensure config contains only known top-level sections."""
    unknown_sections = [key for key in yaml_config if key not in _SECTIONS]
    if unknown_sections:
        section = unknown_sections[0]
        raise ValueError(
            format_user_error(
                what=f"unknown config section '{section}'.",
                why="settings must be grouped under supported sections",
                how_to_fix=f"use only: {', '.join(_SECTIONS)}",
            )
        )


def _dict_to_typed_config(raw: Mapping[str, Any]) -> AppConfig:
    """Map validated dictionary data into the typed config dataclasses."""
    for section in _SECTIONS:
        if not isinstance(raw.get(section, {}), Mapping):
            raise ValueError(
                format_user_error(
                    what=f"config section '{section}' must be a mapping.",
                    why="each section groups named options",
                    how_to_fix=f"write {section} options as key: value pairs",
                )
            )

    naming_data = dict(raw.get("naming", {}))
    preview_data = dict(raw.get("preview", {}))
    if not isinstance(preview_data.get("sample", {}), Mapping):
        raise ValueError(
            format_user_error(
                what="preview.sample must be a mapping.",
                why="sample overrides are placeholder names with values",
                how_to_fix="write overrides like Series: Berserk",
            )
        )

    for section, data, known in (
        ("naming", naming_data, [item.name for item in fields(NamingConfig)]),
        ("preview", preview_data, [item.name for item in fields(PreviewConfig)]),
    ):
        unknown_keys = [key for key in data if key not in known]
        if unknown_keys:
            raise ValueError(
                format_user_error(
                    what=f"unknown config key '{section}.{unknown_keys[0]}'.",
                    why="configuration file contains unsupported fields",
                    how_to_fix=f"remove it or use one of: {', '.join(known)}",
                )
            )

    return AppConfig(naming=NamingConfig(**naming_data), preview=PreviewConfig(**preview_data))
