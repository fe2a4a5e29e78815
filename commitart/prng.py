"""Deterministic pseudo-randomness shared by every part of the engine.

Nothing in the renderer is allowed to call :mod:`random`.  Each consumer
creates its own generator with :func:`create_prng` from a seed it derives
from the repository descriptor, so subsystems never depend on the order in
which others draw numbers.

The generator reproduces the classic linear congruential construction
``state = (1103515245 * state + 12345) mod 2**31`` evaluated in IEEE-754
doubles.  The intermediate product exceeds 2**53 and is rounded, which is
part of the reference behaviour: using exact integer arithmetic here would
give a different (and incompatible) sequence.
"""

from __future__ import annotations

import math
from typing import Callable, Iterator

__all__ = [
    "Prng",
    "create_prng",
    "string_hash",
    "utf16_units",
    "utf16_length",
    "map_range",
    "clamp",
]

Prng = Callable[[], float]

_LCG_A = 1103515245.0
_LCG_C = 12345.0
_LCG_M = 2147483648.0  # 2**31


def create_prng(seed: int) -> Prng:
    """Return a closure yielding floats in ``[0, 1)`` for ``seed``.

    Seeds of zero or below are coerced to ``max(1, abs(seed))``.
    """

    state = float(max(1, abs(int(seed))))

    def _next() -> float:
        nonlocal state
        state = math.fmod(_LCG_A * state + _LCG_C, _LCG_M)
        return state / (_LCG_M - 1.0)

    return _next


def utf16_units(text: str) -> Iterator[int]:
    """Yield the UTF-16 code units of ``text`` (surrogate pairs expanded)."""

    for ch in text:
        code = ord(ch)
        if code > 0xFFFF:
            code -= 0x10000
            yield 0xD800 + (code >> 10)
            yield 0xDC00 + (code & 0x3FF)
        else:
            yield code


def utf16_length(text: str) -> int:
    return sum(2 if ord(ch) > 0xFFFF else 1 for ch in text)


def _int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def string_hash(text: str) -> int:
    """Fold ``text`` into a non-negative 31-bit integer.

    ``h = ((h << 5) - h + unit) & 0xFFFFFFFF`` with 32-bit signed wrap at
    every step, result ``abs(h)``.
    """

    h = 0
    for unit in utf16_units(text or ""):
        h = _int32(_int32(h << 5) - h + unit)
    return abs(h)


def map_range(value: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    return ((value - in_min) * (out_max - out_min)) / (in_max - in_min) + out_min


def clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))
