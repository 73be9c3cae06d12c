"""Deterministic mapping from extracted colours (or raw bytes) to chakra entries.

Both functions are pure: the same input always yields the same selection,
in the same order. The arithmetic is fixed; changing it changes which
aura every previously analysed photo gets.
"""

from collections.abc import Iterable, Sequence

from aura_reader.core.palette import CHAKRAS
from aura_reader.core.types import ChakraColor, ContractViolation, RGBSample

STEP = 17
SEED_OFFSETS = (100, 200)


def colour_hash(samples: Iterable[RGBSample | tuple[int, int, int]]) -> int:
    """Sum of r + 2g + 3b over all samples."""
    total = 0
    for s in samples:
        r, g, b = s.rgb if isinstance(s, RGBSample) else s[:3]
        total += int(r) + 2 * int(g) + 3 * int(b)
    return total


def select_palette(
    samples: Sequence[RGBSample | tuple[int, int, int]],
    palette: Sequence[ChakraColor] = CHAKRAS,
) -> tuple[ChakraColor, ...]:
    """Pick 2 or 3 distinct entries from the dominant colours."""
    if not samples:
        raise ContractViolation('select_palette needs at least one colour sample')

    size = len(palette)
    h = colour_hash(samples)
    count = min(2 + h % 2, size)

    chosen: list[int] = []
    for i in range(count):
        index = (h + i * STEP) % size
        while index in chosen:
            index = (index + 1) % size
        chosen.append(index)
    return tuple(palette[i] for i in chosen)


def _unit(data: bytes | str, offset: int) -> int:
    """Byte value (or code point for str) at offset; 0 past the end."""
    if offset >= len(data):
        return 0
    unit = data[offset]
    return ord(unit) if isinstance(unit, str) else unit


def seed_of(data: bytes | str) -> int:
    return len(data) + sum(_unit(data, off) for off in SEED_OFFSETS)


def select_palette_from_seed(
    data: bytes | str,
    palette: Sequence[ChakraColor] = CHAKRAS,
) -> tuple[ChakraColor, ChakraColor]:
    """Fallback when pixels cannot be read: pick exactly 2 entries from the raw input."""
    size = len(palette)
    seed = seed_of(data)
    first = seed % size
    second = (seed * 7) % size
    if second == first:
        second = (second + 1) % size
    return (palette[first], palette[second])
