"""Short aura readings rendered from the selected chakra entries.

Templates live in three buckets keyed by selection size. Each template's
placeholders must be exactly the field names of its bucket
(see template_fields); tests enforce this for every template.
"""

import random
import string
from collections.abc import Sequence

from aura_reader.core.types import ChakraColor, ContractViolation

TEMPLATES: dict[str, tuple[str, ...]] = {
    'single': (
        'Your aura radiates pure {color} energy, signaling deep {trait1} within you. '
        'The {chakra} chakra is strongly activated, drawing {keyword1} into your life, '
        'and {keyword2} follows close behind. Others feel how {trait2} you are.',
        'A beautiful {color} light surrounds you, reflecting your {trait1} and {trait2} nature. '
        'Your {chakra} chakra speaks of {keyword1} and {keyword2}.',
        'The {color} glow of your {chakra} chakra reveals a soul that is {trait1} and {trait2}. '
        'Trust in your natural gift for {keyword1} and {keyword2}.',
    ),
    'dual': (
        'Your aura dances between {color1} and {color2}, creating a mesmerizing harmony. '
        'The {trait1} energy of your {chakra1} chakra blends beautifully with the {trait2} essence '
        'of your {chakra2}, joining {keyword1} with {keyword2}.',
        'A stunning blend of {color1} and {color2} surrounds you, revealing both {trait1} and {trait2} '
        'aspects of your being. Your {chakra1} and {chakra2} chakras are working in beautiful alignment, '
        'bringing {keyword1} and {keyword2}.',
        'The interplay of {color1} and {color2} in your aura tells a story of {keyword1} meeting {keyword2}. '
        'You carry both {trait1} wisdom and {trait2} grace, rooted in your {chakra1} and {chakra2} chakras.',
    ),
    'triple': (
        'Your aura pulses with the magnificent trinity of {color1}, {color2}, and {color3}. '
        'This rare combination speaks to a soul that is {trait1}, {trait2}, and {trait3}, '
        'drawn to {keyword1}, {keyword2}, and {keyword3}.',
        'Three powerful energies converge in your field: the {color1} of {keyword1}, '
        'the {color2} of {keyword2}, and the {color3} of {keyword3}. '
        'You are {trait1}, {trait2}, and {trait3}, a multifaceted being of light.',
    ),
}

_BUCKETS = {1: 'single', 2: 'dual', 3: 'triple'}


def bucket_for(size: int) -> str:
    if size not in _BUCKETS:
        raise ContractViolation(f'a reading needs 1 to 3 chakra colours, got {size}')
    return _BUCKETS[size]


def template_fields(template: str) -> set[str]:
    """Placeholder names used by a template."""
    return {name for _text, name, _spec, _conv in string.Formatter().parse(template) if name}


def reading_fields(selection: Sequence[ChakraColor]) -> dict[str, str]:
    """Field values for the bucket matching len(selection)."""
    bucket = bucket_for(len(selection))
    if bucket == 'single':
        c = selection[0]
        return {
            'color': c.name.lower(),
            'chakra': c.chakra,
            'trait1': c.traits[0],
            'trait2': c.traits[1],
            'keyword1': c.keywords[0],
            'keyword2': c.keywords[1],
        }

    fields: dict[str, str] = {}
    for i, c in enumerate(selection, start=1):
        fields[f'color{i}'] = c.name.lower()
        fields[f'trait{i}'] = c.traits[0]
        fields[f'keyword{i}'] = c.keywords[0]
        if bucket == 'dual':
            fields[f'chakra{i}'] = c.chakra
    return fields


def synthesize_reading(selection: Sequence[ChakraColor], rng: random.Random | None = None) -> str:
    """Render a reading for 1-3 distinct chakra entries. rng only picks the template."""
    if len(set(selection)) != len(selection):
        raise ContractViolation('chakra selection contains duplicates')
    fields = reading_fields(selection)
    rng = rng or random.Random()
    template = rng.choice(TEMPLATES[bucket_for(len(selection))])
    return template.format(**fields)
