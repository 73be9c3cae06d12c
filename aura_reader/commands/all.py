"""Run the whole pipeline and combine into a single report.

Runs, in order: colours, chakras, reading, overlay.
An undecodable photo still gets chakras and a reading (seed fallback);
overlay reports the decode error.

Example:
    uv run aura-tool all ./out portrait.jpg
    uv run aura-tool all ./out portrait.jpg --json --seed 3
"""

from aura_reader.core.types import Command, Report, SourceImage

command = Command(
    name='all',
    help='Run colours, chakras, reading and overlay. Combine into a single report.',
)

PIPELINE = ('colours', 'chakras', 'reading', 'overlay')


@command.run
def run(source: SourceImage, report: Report, args) -> None:
    from aura_reader.registry import get

    for name in PIPELINE:
        get(name).execute(source, report, args)
