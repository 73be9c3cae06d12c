"""Aura glow compositor: layered radial gradients over a copy of the photo.

Layer order (each filled over the whole frame):

  wash      one gradient per chakra, centres spread around the focal point
  ring-N    RING_COUNT bands at growing radii, chakras taken round-robin
  edge      bright rim from primary/secondary, strongest at the border
  crown     top glow from the last chakra         (accents only)
  side-L/R  glows left/right of the subject        (accents only)
  vignette  dark multiply rim

Geometry is resolution independent: the focal point sits at (w/2, 0.4h),
centres are fractions of width/height and every radius is a fraction of
MAX_RADIUS * max(w, h).

Gradients follow 2D canvas rules: t = (d - r0) / (r1 - r0) clamped to
[0, 1], stops interpolated in premultiplied RGBA. Blending assumes the
opaque photo as backdrop: out = (1 - a) * Cb + a * B(Cb, Cs).
"""

import math
from collections.abc import Sequence

import numpy as np
from PIL import Image

from aura_reader.core.codec import decode_image
from aura_reader.core.types import ChakraColor, ColorStop, ContractViolation, GradientLayer

FOCAL_Y = 0.4
MAX_RADIUS = 0.9
RING_COUNT = 5

BLEND_MODES = ('source-over', 'screen', 'multiply')

# (offset, alpha) tables. Alphas are fixed opacities, not derived.
WASH_STOPS = ((0.0, 0.0), (0.2, 0.19), (0.4, 0.31), (0.6, 0.25), (0.8, 0.15), (1.0, 0.06))
RING_STOPS = ((0.0, 0.0), (0.3, 0.21), (0.5, 0.33), (0.7, 0.21), (1.0, 0.0))
CROWN_STOPS = ((0.0, 0.31), (0.3, 0.21), (0.6, 0.08), (1.0, 0.0))
SIDE_STOPS = ((0.0, 0.38), (0.2, 0.27), (0.5, 0.15), (1.0, 0.0))
EDGE_ALPHAS = (0.0, 0.13, 0.25, 0.38, 0.50)  # at 0, .4, .6, .8, 1
VIGNETTE_ALPHAS = (0.0, 0.05, 0.15)  # at 0, .8, 1

BLACK = (0, 0, 0)


def _stops(rgb: tuple[int, int, int], table) -> tuple[ColorStop, ...]:
    return tuple(ColorStop(offset, rgb, alpha) for offset, alpha in table)


def build_layers(
    width: int,
    height: int,
    selection: Sequence[ChakraColor],
    accents: bool = True,
    ring_count: int = RING_COUNT,
) -> list[GradientLayer]:
    """Return the ordered gradient layers for a frame of width x height."""
    if not selection:
        raise ContractViolation('overlay needs at least one chakra colour')

    n = len(selection)
    cx, cy = width / 2, height * FOCAL_Y
    r = max(width, height) * MAX_RADIUS
    layers: list[GradientLayer] = []

    for i, c in enumerate(selection):
        angle = 2 * math.pi * i / n
        centre = (cx + math.cos(angle) * width * 0.2, cy + math.sin(angle) * height * 0.15)
        layers.append(GradientLayer(f'wash-{i}', centre, r * 0.2, r, _stops(c.rgb, WASH_STOPS), 'screen', c))

    for i in range(ring_count):
        c = selection[i % n]
        ring_r = r * (0.25 + i * 0.15)
        layers.append(
            GradientLayer(
                f'ring-{i}', (cx, cy), ring_r - r * 0.08, ring_r + r * 0.08, _stops(c.rgb, RING_STOPS), 'screen', c
            )
        )

    primary = selection[0]
    secondary = selection[1] if n > 1 else primary
    edge_stops = (
        ColorStop(0.0, BLACK, EDGE_ALPHAS[0]),
        ColorStop(0.4, primary.rgb, EDGE_ALPHAS[1]),
        ColorStop(0.6, secondary.rgb, EDGE_ALPHAS[2]),
        ColorStop(0.8, primary.rgb, EDGE_ALPHAS[3]),
        ColorStop(1.0, secondary.rgb, EDGE_ALPHAS[4]),
    )
    layers.append(GradientLayer('edge', (cx, cy), r * 0.3, r * 1.1, edge_stops, 'screen', primary))

    if accents:
        crown = selection[-1]
        layers.append(
            GradientLayer('crown', (cx, height * 0.1), 0.0, r * 0.6, _stops(crown.rgb, CROWN_STOPS), 'screen', crown)
        )
        for side_index, (side, label) in enumerate(((-1, 'L'), (1, 'R'))):
            c = selection[side_index % n]
            layers.append(
                GradientLayer(
                    f'side-{label}', (cx + side * width * 0.4, cy), 0.0, r * 0.7, _stops(c.rgb, SIDE_STOPS), 'screen', c
                )
            )

    vignette_stops = (
        ColorStop(0.0, BLACK, VIGNETTE_ALPHAS[0]),
        ColorStop(0.8, BLACK, VIGNETTE_ALPHAS[1]),
        ColorStop(1.0, BLACK, VIGNETTE_ALPHAS[2]),
    )
    layers.append(GradientLayer('vignette', (cx, cy), r * 0.4, r * 1.3, vignette_stops, 'multiply'))
    return layers


def render_gradient(layer: GradientLayer, width: int, height: int) -> tuple[np.ndarray, np.ndarray]:
    """Rasterize a radial gradient. Returns (premultiplied rgb HxWx3, alpha HxW), floats in [0, 1]."""
    xs = np.arange(width, dtype=np.float32) + 0.5
    ys = np.arange(height, dtype=np.float32)[:, None] + 0.5
    dist = np.hypot(xs - layer.center[0], ys - layer.center[1])

    span = layer.outer_radius - layer.inner_radius
    if span <= 0:
        # Degenerate gradient paints nothing
        return np.zeros((height, width, 3), np.float32), np.zeros((height, width), np.float32)
    t = np.clip((dist - layer.inner_radius) / span, 0.0, 1.0)

    offsets = [s.offset for s in layer.stops]
    alpha = np.interp(t, offsets, [s.alpha for s in layer.stops]).astype(np.float32)
    premult = np.empty((height, width, 3), np.float32)
    for ch in range(3):
        premult[..., ch] = np.interp(t, offsets, [s.rgb[ch] / 255.0 * s.alpha for s in layer.stops])
    return premult, alpha


class Canvas:
    """Float RGB accumulator with a current blend mode, like a 2D context."""

    def __init__(self, image: Image.Image):
        self.width, self.height = image.size
        self.pixels = np.asarray(image.convert('RGB'), dtype=np.float32) / 255.0
        self.blend_mode = 'source-over'

    def set_blend_mode(self, mode: str) -> None:
        if mode not in BLEND_MODES:
            raise ContractViolation(f'Unknown blend mode: {mode}. Available: {", ".join(BLEND_MODES)}')
        self.blend_mode = mode

    def fill(self, layer: GradientLayer) -> None:
        """Fill the whole canvas with a gradient using the current blend mode."""
        premult, alpha = render_gradient(layer, self.width, self.height)
        cb = self.pixels
        a = alpha[..., None]
        if self.blend_mode == 'screen':
            # (1 - a)Cb + a(Cb + Cs - Cb Cs)
            out = cb + premult * (1.0 - cb)
        elif self.blend_mode == 'multiply':
            out = (1.0 - a) * cb + cb * premult
        else:
            out = (1.0 - a) * cb + premult
        self.pixels = np.clip(out, 0.0, 1.0)

    def to_image(self) -> Image.Image:
        return Image.fromarray(np.round(self.pixels * 255.0).astype(np.uint8))


def render_layers(canvas: Canvas, layers: Sequence[GradientLayer]) -> Canvas:
    """Apply layers in order, then restore source-over."""
    for layer in layers:
        canvas.set_blend_mode(layer.blend)
        canvas.fill(layer)
    canvas.set_blend_mode('source-over')
    return canvas


def composite_overlay(
    image,
    selection: Sequence[ChakraColor],
    accents: bool = True,
    ring_count: int = RING_COUNT,
) -> Image.Image:
    """Draw the aura glow over a copy of image. Returns a new RGB image of the same size.

    `image` may be a PIL image or anything decode_image() accepts; an
    undecodable source raises DecodeError before any canvas exists.
    """
    if not selection:
        raise ContractViolation('overlay needs at least one chakra colour')
    source = decode_image(image)
    layers = build_layers(source.width, source.height, selection, accents=accents, ring_count=ring_count)
    canvas = render_layers(Canvas(source), layers)
    return canvas.to_image()
