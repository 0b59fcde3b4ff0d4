"""chapternamer command line entrypoint."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

import yaml

from chapternamer.config import (
    default_config,
    merge_typed_config,
    to_naming_settings,
    to_sample_dataset,
    warn_on_unknown_placeholders,
)
from chapternamer.errors import (
    ChapterNamerError,
    ConfigError,
    ExitCode,
    ValidationError,
    format_user_error,
    parse_user_error_message,
)
from chapternamer.preview import preview_file_name, preview_folder
from chapternamer.variables import VariableContext, VariableRegistry

_VERSION = "0.1.0"


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser for the preview command."""
    parser = argparse.ArgumentParser(prog="chapternamer", description="Preview chapter file and folder naming templates.")
    parser.add_argument("--config", help="Path to YAML settings file")
    parser.add_argument("--file-template", help="Chapter file name template")
    parser.add_argument("--folder-template", help="Series folder template")
    parser.add_argument("--chapter-padding", help="Chapter padding: auto, 0, 00, 000 or 0000")
    parser.add_argument("--volume-padding", help="Volume padding: 0, 00 or 000")
    parser.add_argument("--format", dest="output_format", help="Output format: 0 (CBZ) or 1 (PDF)")
    parser.add_argument("--title", dest="include_title", action="store_true", default=None, help="Include chapter title")
    parser.add_argument("--no-title", dest="include_title", action="store_false", default=None, help="Exclude chapter title")
    parser.add_argument("--auto-width", type=int, help="Digit width used by auto chapter padding")
    parser.add_argument(
        "--set",
        dest="sample_values",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override a sample value, e.g. --set Chapter=7",
    )
    parser.add_argument("--list-variables", action="store_true", help="Print available placeholders and exit")
    parser.add_argument("--verbose", action="store_true", help="Enable INFO logging")
    parser.add_argument("--debug", action="store_true", help="Enable DEBUG logging")
    parser.add_argument("--version", action="store_true", help="Print chapternamer version and exit")
    return parser


def _configure_logging(*, debug: bool, verbose: bool) -> None:
    """Configure global logging level based on CLI flags."""
    level = logging.WARNING
    if verbose:
        level = logging.INFO
    if debug:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", force=True)


def _load_config(*, path: str | Path) -> dict[str, Any]:
    """Read YAML settings from disk."""
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(
            what=f"config file not found: {config_path}",
            why="--config must point to a readable YAML file",
            remediation="create the settings file or omit --config to use defaults",
        )

    try:
        content = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(
            what=f"config file is not valid YAML: {config_path}",
            why=str(exc),
            remediation="fix the YAML syntax; quote templates that start with '{' or '['",
        ) from exc
    if content is None:
        content = {}
    if not isinstance(content, dict):
        raise ConfigError(
            what="config content must be a mapping.",
            why="chapternamer requires named options under top-level keys",
            remediation="use YAML object format, for example: naming: {file_name_template: '{Series} {Chapter}'}",
        )
    return content


def _parse_sample_values(pairs: list[str]) -> dict[str, str]:
    """Parse repeated ``--set KEY=VALUE`` options."""
    values: dict[str, str] = {}
    for pair in pairs:
        key, separator, value = pair.partition("=")
        if not separator or not key.strip():
            raise ValidationError(
                what=f"invalid --set value '{pair}'.",
                why="sample overrides must name a placeholder and a value",
                remediation="use the form --set Chapter=7",
            )
        values[key.strip()] = value
    return values


def _cli_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Map parsed flags onto config sections; unset flags stay None."""
    return {
        "naming": {
            "file_name_template": args.file_template,
            "folder_template": args.folder_template,
            "chapter_padding": args.chapter_padding,
            "volume_padding": args.volume_padding,
            "output_format": args.output_format,
            "include_chapter_title": args.include_title,
        },
        "preview": {
            "auto_width": args.auto_width,
            "sample": _parse_sample_values(args.sample_values),
        },
    }


def _print_variables(registry: VariableRegistry) -> None:
    """Print the placeholder catalog grouped by template kind."""
    for context in VariableContext:
        print(f"{context.value} variables:")
        for definition in registry.variables_for(context):
            print(f"  {definition.token:<15} {definition.description}")


def main(argv: list[str] | None = None) -> int:
    """Run CLI command and return process status code."""
    raw_argv = argv if argv is not None else sys.argv[1:]
    if "--version" in raw_argv:
        print(f"chapternamer {_VERSION}")
        return int(ExitCode.OK)

    parser = build_parser()
    args = parser.parse_args(raw_argv)
    _configure_logging(debug=args.debug, verbose=args.verbose)
    logger = logging.getLogger(__name__)

    try:
        registry = VariableRegistry()
        if args.list_variables:
            _print_variables(registry)
            return int(ExitCode.OK)

        yaml_config = _load_config(path=args.config) if args.config else {}
        config = merge_typed_config(defaults=default_config(), yaml_config=yaml_config, cli_args=_cli_overrides(args))
        warn_on_unknown_placeholders(config, registry=registry)
        settings = to_naming_settings(config)
        sample = to_sample_dataset(config)
        logger.info("Previewing with %s", settings)

        print(f"file: {preview_file_name(settings, sample, auto_width=config.preview.auto_width)}")
        print(f"folder: {preview_folder(settings, sample, auto_width=config.preview.auto_width)}")
        return int(ExitCode.OK)
    except ChapterNamerError as exc:
        print(str(exc), file=sys.stderr)
        return int(exc.exit_code)
    except ValueError as exc:
        parsed = parse_user_error_message(str(exc))
        if parsed is not None:
            what, why, remediation = parsed
            structured = ValidationError(what=what, why=why, remediation=remediation)
            print(str(structured), file=sys.stderr)
            return int(structured.exit_code)
        print(
            str(
                ValidationError(
                    what="invalid naming settings.",
                    why=str(exc),
                    remediation="review your settings and try again",
                )
            ),
            file=sys.stderr,
        )
        return int(ExitCode.VALIDATION)
    except Exception as exc:  # pragma: no cover - defensive guard
        print(
            format_user_error(
                what="unexpected runtime failure.",
                why=str(exc),
                how_to_fix="inspect stack trace and re-run with validated settings",
            ),
            file=sys.stderr,
        )
        return int(ExitCode.INTERNAL)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
