"""Write a short aura reading for the selected chakra colours.

Picks one template from the bucket matching the number of chakras
(single, dual or triple) and fills in colour names, chakra labels,
traits and keywords. Template choice is random; pass --seed N for a
repeatable reading.

Example:
    uv run aura-tool reading ./out portrait.jpg --seed 7
"""

import random

from aura_reader.commands.chakras import resolve_selection
from aura_reader.core.reading import synthesize_reading
from aura_reader.core.types import Command, Report, SourceImage

command = Command(
    name='reading',
    help='Render a short reading from the chakra selection (--seed for repeatable output).',
)


@command.run
def run(source: SourceImage, report: Report, args) -> None:
    selection = resolve_selection(source, report, args)
    seed = getattr(args, 'seed', None)
    rng = random.Random(seed) if seed is not None else None
    report.add('reading', {'text': synthesize_reading(selection, rng=rng)})
