"""Dominant colour extraction from the centre of the photo.

Crops the centred square (a third of the short side), samples every 10th
pixel, floors each channel to a multiple of 32 and counts buckets.
Reports the 5 most frequent buckets with their share of those 5 and the
nearest chakra colour for reference.

If the image cannot be decoded, reports the error; the chakras command
then falls back to the seed mapping.

Example:
    uv run aura-tool colours ./out portrait.jpg
"""

from aura_reader.core.extract import extract_from_image
from aura_reader.core.palette import nearest_chakra
from aura_reader.core.types import Command, Report, SourceImage

command = Command(
    name='colours',
    help='Extract the 5 dominant quantized colours from the centre of the photo.',
)


@command.run
def run(source: SourceImage, report: Report, args) -> None:
    if source.image is None:
        report.add('colours', {'error': source.decode_error or 'image not decoded'})
        return

    samples = extract_from_image(source.image)
    total = sum(s.count for s in samples)
    dominant = []
    for s in samples:
        nearest, dist = nearest_chakra(s.rgb)
        dominant.append(
            {
                'hex': s.hex,
                'r': s.r,
                'g': s.g,
                'b': s.b,
                'count': s.count,
                'pct': round(s.count / total * 100, 1),
                'nearest': nearest.name.lower(),
                'distance': round(dist, 1),
            }
        )
    report.add('colours', {'dominant': dominant})
