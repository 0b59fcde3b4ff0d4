"""Zero-padding policies for chapter and volume numbers."""

from __future__ import annotations

import re
from enum import Enum
from typing import Iterable

from chapternamer.errors import format_user_error

_NUMBER_PATTERN = re.compile(r"[0-9]+")


class PaddingPolicy(Enum):
    """Padding choice, keyed by the token the settings layer stores."""

    AUTO = "auto"
    NONE = "0"
    WIDTH2 = "00"
    WIDTH3 = "000"
    WIDTH4 = "0000"

    @property
    def width(self) -> int | None:
        """Fixed target width, or ``None`` for ``AUTO``."""
        if self is PaddingPolicy.AUTO:
            return None
        return len(self.value)

    @classmethod
    def from_setting(cls, token: str) -> PaddingPolicy:
        """Map a stored settings token such as ``"000"`` or ``"auto"`` to a policy."""
        normalized = str(token).strip().lower()
        for policy in cls:
            if policy.value == normalized:
                return policy
        options = ", ".join(policy.value for policy in cls)
        raise ValueError(
            format_user_error(
                what=f"unknown padding setting '{token}'.",
                why="padding must be one of the supported width tokens",
                how_to_fix=f"use one of: {options}",
            )
        )


CHAPTER_POLICIES = frozenset(PaddingPolicy)
VOLUME_POLICIES = frozenset({PaddingPolicy.NONE, PaddingPolicy.WIDTH2, PaddingPolicy.WIDTH3})


def canonical_digits(value: str) -> str | None:
    """Return ``value`` as non-negative integer text without leading zeros.

    Returns ``None`` when ``value`` is not made of ASCII digits. The text is
    never converted to ``int``, so arbitrarily long numbers are accepted.
    """
    text = value.strip()
    if not _NUMBER_PATTERN.fullmatch(text):
        return None
    return text.lstrip("0") or "0"


def pad_to_width(value: str, width: int) -> str:
    """Left-pad a numeric ``value`` with zeros to at least ``width`` digits.

    Non-numeric values are returned unchanged. Values already wider than
    ``width`` keep all of their digits.
    """
    digits = canonical_digits(value)
    if digits is None:
        return value
    return digits.zfill(max(width, 0))


def pad(value: str, policy: PaddingPolicy, fallback_width: int) -> str:
    """Resolve ``policy`` for ``value``.

    ``AUTO`` pads to ``fallback_width``, which the caller derives from the
    whole series (see :func:`auto_width`). ``NONE`` still normalizes the
    number to its canonical text, so ``"007"`` becomes ``"7"``.
    """
    width = policy.width
    if width is None:
        width = fallback_width
    return pad_to_width(value, width)


def auto_width(chapter_values: Iterable[str], *, minimum: int = 1) -> int:
    """Return the digit count of the largest numeric chapter in a series."""
    widest = minimum
    for value in chapter_values:
        digits = canonical_digits(value)
        if digits is not None:
            widest = max(widest, len(digits))
    return widest
