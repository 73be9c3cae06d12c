"""Map the photo to 2 or 3 chakra colours.

Deterministic: hashes the dominant colours (sum of r + 2g + 3b) and walks
the 7-entry palette in steps of 17, probing past duplicates. An odd hash
selects 3 chakras, an even hash 2.

If the image cannot be decoded, falls back to a seed over the raw file
bytes (length + byte 100 + byte 200) and selects exactly 2.

Use --chakras red,indigo to skip the mapping and force a selection.

Example:
    uv run aura-tool chakras ./out portrait.jpg
    uv run aura-tool chakras ./out portrait.jpg --json
"""

from aura_reader.core.mapper import select_palette_from_seed
from aura_reader.core.palette import chakra_by_name, parse_chakra_names
from aura_reader.core.pipeline import select_for_source
from aura_reader.core.report import chakra_dict
from aura_reader.core.types import ChakraColor, Command, Report, SourceImage

command = Command(
    name='chakras',
    help='Deterministically map the photo to 2-3 chakra colours (seed fallback on decode failure).',
)


def resolve_selection(source: SourceImage, report: Report, args) -> tuple[ChakraColor, ...]:
    """Selection already in the report, else run this command first."""
    if 'selection' not in report.results.get('chakras', {}):
        command.execute(source, report, args)
    return tuple(chakra_by_name(c['name']) for c in report.get('chakras', 'selection'))


@command.run
def run(source: SourceImage, report: Report, args) -> None:
    forced = getattr(args, 'chakras', None)
    if forced:
        selection, path = parse_chakra_names(forced), 'manual'
    elif source.image is not None:
        selection, path = select_for_source(source.image)
    else:
        selection, path = select_palette_from_seed(source.data), 'seed'

    report.add('chakras', {'selection': [chakra_dict(c) for c in selection], 'source': path})
