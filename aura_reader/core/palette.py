"""The chakra palette: seven fixed colour entries, plus colour helpers.

CHAKRAS is ordered root to crown and indexed 0..6. The mapper selects
entries by index, so the order is part of the output contract.
"""

import math
import random

from aura_reader.core.types import ChakraColor, ContractViolation

CHAKRAS: tuple[ChakraColor, ...] = (
    ChakraColor(
        name='Red',
        chakra='Root',
        hsl='hsl(0, 85%, 60%)',
        hex='#eb4d4d',
        traits=('grounded', 'passionate', 'energetic', 'vital', 'courageous'),
        element='Earth',
        keywords=('survival', 'stability', 'physical energy', 'primal force'),
    ),
    ChakraColor(
        name='Orange',
        chakra='Sacral',
        hsl='hsl(25, 95%, 55%)',
        hex='#f57c1f',
        traits=('creative', 'emotional', 'sensual', 'adventurous', 'spontaneous'),
        element='Water',
        keywords=('creativity', 'pleasure', 'emotions', 'flow'),
    ),
    ChakraColor(
        name='Yellow',
        chakra='Solar Plexus',
        hsl='hsl(45, 95%, 55%)',
        hex='#f5c91f',
        traits=('confident', 'optimistic', 'powerful', 'intellectual', 'self-assured'),
        element='Fire',
        keywords=('personal power', 'will', 'confidence', 'transformation'),
    ),
    ChakraColor(
        name='Green',
        chakra='Heart',
        hsl='hsl(140, 60%, 45%)',
        hex='#2eb872',
        traits=('loving', 'compassionate', 'healing', 'balanced', 'nurturing'),
        element='Air',
        keywords=('love', 'compassion', 'harmony', 'connection'),
    ),
    ChakraColor(
        name='Blue',
        chakra='Throat',
        hsl='hsl(200, 80%, 55%)',
        hex='#2da3e0',
        traits=('communicative', 'truthful', 'expressive', 'calm', 'authentic'),
        element='Sound',
        keywords=('communication', 'truth', 'expression', 'clarity'),
    ),
    ChakraColor(
        name='Indigo',
        chakra='Third Eye',
        hsl='hsl(240, 60%, 55%)',
        hex='#4747c2',
        traits=('intuitive', 'wise', 'perceptive', 'spiritual', 'insightful'),
        element='Light',
        keywords=('intuition', 'wisdom', 'perception', 'inner vision'),
    ),
    ChakraColor(
        name='Violet',
        chakra='Crown',
        hsl='hsl(280, 70%, 60%)',
        hex='#a855c9',
        traits=('enlightened', 'connected', 'transcendent', 'imaginative', 'divine'),
        element='Thought',
        keywords=('spirituality', 'consciousness', 'unity', 'bliss'),
    ),
)


def rgb_distance(a: tuple[int, int, int], b: tuple[int, int, int]) -> float:
    """Euclidean distance in RGB space. Plain ints, so no uint8 wraparound."""
    return math.sqrt(sum((int(x) - int(y)) ** 2 for x, y in zip(a, b)))


def nearest_chakra(rgb: tuple[int, int, int]) -> tuple[ChakraColor, float]:
    """Return the palette entry closest to rgb and its distance."""
    best = CHAKRAS[0]
    best_dist = rgb_distance(rgb, best.rgb)
    for entry in CHAKRAS[1:]:
        dist = rgb_distance(rgb, entry.rgb)
        if dist < best_dist:
            best, best_dist = entry, dist
    return best, best_dist


def chakra_by_name(name: str) -> ChakraColor | None:
    """Case-insensitive lookup by colour name ('violet') or chakra label ('Third Eye')."""
    key = name.strip().lower()
    for entry in CHAKRAS:
        if entry.name.lower() == key or entry.chakra.lower() == key:
            return entry
    return None


def parse_chakra_names(names: str) -> tuple[ChakraColor, ...]:
    """Parse a comma-separated list such as 'red,indigo' into palette entries."""
    selection = []
    for part in names.split(','):
        if not part.strip():
            continue
        entry = chakra_by_name(part)
        if entry is None:
            known = ', '.join(c.name.lower() for c in CHAKRAS)
            raise ContractViolation(f'Unknown chakra colour: {part.strip()!r}. Known: {known}')
        if entry not in selection:
            selection.append(entry)
    return tuple(selection)


def random_chakras(count: int = 2, rng: random.Random | None = None) -> tuple[ChakraColor, ...]:
    """Pick `count` distinct entries at random (not used by the deterministic mapper)."""
    if not 1 <= count <= len(CHAKRAS):
        raise ContractViolation(f'count must be between 1 and {len(CHAKRAS)}, got {count}')
    rng = rng or random.Random()
    return tuple(rng.sample(CHAKRAS, count))
