"""Conversion of Docker's human-readable byte quantities into byte counts."""

from __future__ import annotations

import math
import re
from typing import Mapping, Optional

from configs.metrics_config import DEFAULT_UNIT_MULTIPLIERS
from metrics.errors import MalformedNumber, UnrecognizedUnit

_DECIMAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)", re.ASCII)


def parse_decimal(text: str) -> float:
    """Parse a plain decimal such as ``34.5`` (no exponent, no inf/nan).

    :param text: Candidate number; surrounding whitespace is ignored.
    :return: Parsed float value.
    :raises MalformedNumber: If ``text`` is not a plain decimal or overflows a float.
    """
    candidate = text.strip()
    if not _DECIMAL.fullmatch(candidate):
        raise MalformedNumber(text)
    value = float(candidate)
    if not math.isfinite(value):
        raise MalformedNumber(text)
    return value


class UnitConverter:
    """Turn strings like ``"34.5MiB"`` or ``"1.2MB"`` into integer byte counts."""

    def __init__(self, multipliers: Optional[Mapping[str, int]] = None) -> None:
        """Build the suffix table.

        :param multipliers: Upper-case suffix to multiplier, defaults to KB/MB/GB/MIB/GIB.
        """
        table = multipliers if multipliers is not None else DEFAULT_UNIT_MULTIPLIERS
        # Longest suffix first so "MIB" is never mistaken for a shorter unit.
        self._units = sorted(
            ((suffix.upper(), int(mult)) for suffix, mult in table.items()),
            key=lambda item: len(item[0]),
            reverse=True,
        )

    def convert(self, quantity: str) -> int:
        """Convert ``quantity`` to bytes, truncating any fractional byte.

        :param quantity: Value such as ``"1.2MB"``; case-insensitive, trimmed.
        :return: Whole number of bytes.
        :raises UnrecognizedUnit: If no configured suffix ends the value.
        :raises MalformedNumber: If the part before the suffix is not a decimal.
        """
        text = quantity.strip().upper()
        for suffix, multiplier in self._units:
            if text.endswith(suffix):
                value = parse_decimal(text[: -len(suffix)]) * multiplier
                if not math.isfinite(value):
                    raise MalformedNumber(quantity)
                return int(value)
        raise UnrecognizedUnit(quantity)
