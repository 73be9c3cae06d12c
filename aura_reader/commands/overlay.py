"""Composite the aura glow over the photo and save it as JPEG.

Layers, in order: a screen-blended colour wash per chakra, 5 concentric
rings cycling through the chakras, a bright edge rim, crown and side
glows (skip with --no-accents or AURA_ACCENTS=0) and a multiply
vignette. Output has the same size as the input and is written to
<out_dir>/<image stem>_aura.jpg.

JPEG quality: --quality, else AURA_JPEG_QUALITY, else 90.

Fails (exit 1) if the image cannot be decoded. There is no fallback.

Example:
    uv run aura-tool overlay ./out portrait.jpg
    uv run aura-tool overlay ./out portrait.jpg --chakras violet --quality 80
"""

import os
from pathlib import Path

from aura_reader.commands.chakras import resolve_selection
from aura_reader.core.codec import encode_jpeg
from aura_reader.core.env import accents_enabled, jpeg_quality
from aura_reader.core.overlay import Canvas, build_layers, render_layers
from aura_reader.core.types import Command, Report, SourceImage

command = Command(
    name='overlay',
    help='Draw the layered aura glow over the photo. Writes <out_dir>/<stem>_aura.jpg.',
)


@command.run
def run(source: SourceImage, report: Report, args) -> None:
    if source.image is None:
        msg = f'overlay: cannot decode {source.path}: {source.decode_error}'
        report.add('overlay', {'error': msg})
        report.record_error(msg)
        return

    selection = resolve_selection(source, report, args)
    accents = accents_enabled(getattr(args, 'no_accents', False))
    quality = jpeg_quality(getattr(args, 'quality', None))

    layers = build_layers(source.image.width, source.image.height, selection, accents=accents)
    result = render_layers(Canvas(source.image), layers).to_image()

    out_dir = getattr(args, 'out_dir', '.')
    os.makedirs(out_dir, exist_ok=True)
    path = os.path.join(out_dir, f'{Path(source.path).stem}_aura.jpg')
    with open(path, 'wb') as f:
        f.write(encode_jpeg(result, quality))

    report.add(
        'overlay',
        {
            'file': path,
            'width': result.width,
            'height': result.height,
            'quality': quality,
            'layers': [layer.name for layer in layers],
        },
    )
