"""Structured errors for naming settings and preview command failures.

The rendering engine never raises for template content; these types cover
settings files, settings values and command line input.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes returned by the ``chapternamer`` preview command."""

    OK = 0
    INTERNAL = 1
    CONFIG = 2
    VALIDATION = 3


@dataclass(slots=True)
class ChapterNamerError(Exception):
    """Settings or CLI failure reported as what failed, why, and how to fix it."""

    what: str
    why: str
    remediation: str
    exit_code: int = int(ExitCode.VALIDATION)

    def __str__(self) -> str:
        """Render the triad as one line for stderr."""
        return format_user_error(what=self.what, why=self.why, how_to_fix=self.remediation)


class ConfigError(ChapterNamerError):
    """Failure caused by an unreadable or malformed settings file."""

    def __init__(self, *, what: str, why: str, remediation: str) -> None:
        super().__init__(what=what, why=why, remediation=remediation, exit_code=int(ExitCode.CONFIG))


class ValidationError(ChapterNamerError):
    """Failure caused by an invalid naming setting or CLI value."""

    def __init__(self, *, what: str, why: str, remediation: str) -> None:
        super().__init__(what=what, why=why, remediation=remediation, exit_code=int(ExitCode.VALIDATION))


def parse_user_error_message(message: str) -> tuple[str, str, str] | None:
    """Split a ``ValueError`` message raised by config validation back into its triad."""
    prefix_what = "what: "
    middle = "; why: "
    suffix = "; how-to-fix: "
    if not message.startswith(prefix_what) or middle not in message or suffix not in message:
        return None

    what_end = message.find(middle)
    why_end = message.find(suffix)
    if what_end < 0 or why_end < 0 or why_end < what_end:
        return None

    what = message[len(prefix_what):what_end]
    why = message[what_end + len(middle):why_end]
    remediation = message[why_end + len(suffix):]
    return what, why, remediation


def format_user_error(*, what: str, why: str, how_to_fix: str) -> str:
    """Build a structured error message for users.

    Args:
        what: A concise description of what failed.
        why: Why the failure happened.
        how_to_fix: Immediate actionable remediation steps.

    Returns:
        A three-part error message string.
    """
    return f"what: {what}; why: {why}; how-to-fix: {how_to_fix}"
