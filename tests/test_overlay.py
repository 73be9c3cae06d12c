"""Tests for aura_reader.core.overlay: layer plan, gradients, blending."""

import numpy as np
import pytest
from aura_reader.core.codec import encode_jpeg
from aura_reader.core.overlay import (
    Canvas,
    build_layers,
    composite_overlay,
    render_gradient,
    render_layers,
)
from aura_reader.core.palette import CHAKRAS
from aura_reader.core.types import ColorStop, ContractViolation, DecodeError, GradientLayer
from PIL import Image

TRIPLE = (CHAKRAS[0], CHAKRAS[3], CHAKRAS[6])


def _photo(w: int = 64, h: int = 48) -> Image.Image:
    rng = np.random.default_rng(1)
    return Image.fromarray(rng.integers(0, 256, size=(h, w, 3), dtype=np.uint8))


class TestBuildLayers:
    def test_order_with_accents(self):
        names = [layer.name for layer in build_layers(100, 100, TRIPLE)]
        assert names == [
            'wash-0',
            'wash-1',
            'wash-2',
            'ring-0',
            'ring-1',
            'ring-2',
            'ring-3',
            'ring-4',
            'edge',
            'crown',
            'side-L',
            'side-R',
            'vignette',
        ]

    def test_without_accents(self):
        names = [layer.name for layer in build_layers(100, 100, TRIPLE, accents=False)]
        assert 'crown' not in names
        assert 'side-L' not in names
        assert names[-1] == 'vignette'

    def test_rings_cycle_round_robin(self):
        rings = [layer for layer in build_layers(100, 100, TRIPLE) if layer.name.startswith('ring-')]
        assert [TRIPLE.index(layer.chakra) for layer in rings] == [0, 1, 2, 0, 1]

    def test_ring_count(self):
        rings = [layer for layer in build_layers(100, 100, TRIPLE, ring_count=8) if layer.name.startswith('ring-')]
        assert len(rings) == 8

    def test_blend_modes(self):
        layers = build_layers(100, 100, TRIPLE)
        assert all(layer.blend == 'screen' for layer in layers[:-1])
        assert layers[-1].blend == 'multiply'

    def test_wash_centres_spread_by_angle(self):
        wash = [layer for layer in build_layers(100, 100, TRIPLE) if layer.name.startswith('wash-')]
        # index 0 sits at angle 0: right of the focal point (50, 40)
        assert wash[0].center == pytest.approx((70.0, 40.0))
        assert wash[1].center[1] > 40.0
        assert wash[2].center[1] < 40.0

    def test_edge_uses_primary_and_secondary(self):
        edge = next(layer for layer in build_layers(100, 100, TRIPLE) if layer.name == 'edge')
        assert edge.stops[0].alpha == 0.0
        assert edge.stops[1].rgb == TRIPLE[0].rgb
        assert edge.stops[2].rgb == TRIPLE[1].rgb
        assert [s.alpha for s in edge.stops] == sorted(s.alpha for s in edge.stops)

    def test_single_entry_edge_repeats_primary(self):
        edge = next(layer for layer in build_layers(100, 100, CHAKRAS[:1]) if layer.name == 'edge')
        assert {s.rgb for s in edge.stops[1:]} == {CHAKRAS[0].rgb}

    def test_crown_uses_last_entry_and_sides_round_robin(self):
        layers = {layer.name: layer for layer in build_layers(100, 100, TRIPLE)}
        assert layers['crown'].chakra is TRIPLE[2]
        assert layers['side-L'].chakra is TRIPLE[0]
        assert layers['side-R'].chakra is TRIPLE[1]

    def test_resolution_independent(self):
        small = build_layers(100, 50, TRIPLE)
        large = build_layers(200, 100, TRIPLE)
        for a, b in zip(small, large):
            assert b.inner_radius == pytest.approx(a.inner_radius * 2)
            assert b.outer_radius == pytest.approx(a.outer_radius * 2)
            assert b.center == pytest.approx((a.center[0] * 2, a.center[1] * 2))

    def test_empty_selection(self):
        with pytest.raises(ContractViolation):
            build_layers(10, 10, ())


class TestRenderGradient:
    def _layer(self, **kw) -> GradientLayer:
        stops = (ColorStop(0.0, (255, 0, 0), 0.5), ColorStop(1.0, (255, 0, 0), 0.0))
        return GradientLayer('t', (5.0, 5.0), kw.get('r0', 2.0), kw.get('r1', 6.0), stops)

    def test_inside_inner_radius_uses_first_stop(self):
        _, alpha = render_gradient(self._layer(), 11, 11)
        assert alpha[5, 5] == pytest.approx(0.5)

    def test_beyond_outer_radius_uses_last_stop(self):
        _, alpha = render_gradient(self._layer(), 30, 30)
        assert alpha[29, 29] == pytest.approx(0.0)

    def test_premultiplied(self):
        premult, alpha = render_gradient(self._layer(), 11, 11)
        assert premult[5, 5, 0] == pytest.approx(alpha[5, 5])
        assert premult[5, 5, 1] == 0.0

    def test_degenerate_paints_nothing(self):
        _, alpha = render_gradient(self._layer(r0=4.0, r1=4.0), 11, 11)
        assert not alpha.any()

    def test_single_precision(self):
        premult, alpha = render_gradient(self._layer(), 11, 11)
        assert premult.dtype == np.float32
        assert alpha.dtype == np.float32


class TestCanvas:
    def test_screen_never_darkens(self):
        base = Image.new('RGB', (40, 40), (90, 90, 90))
        canvas = Canvas(base)
        before = canvas.pixels.copy()
        for layer in build_layers(40, 40, TRIPLE)[:-1]:
            canvas.set_blend_mode(layer.blend)
            canvas.fill(layer)
        assert (canvas.pixels >= before - 1e-9).all()
        assert (canvas.pixels > before).any()

    def test_multiply_vignette_darkens_edges_only(self):
        canvas = Canvas(Image.new('RGB', (100, 100), (255, 255, 255)))
        vignette = build_layers(100, 100, TRIPLE)[-1]
        canvas.set_blend_mode('multiply')
        canvas.fill(vignette)
        assert canvas.pixels[40, 50, 0] == pytest.approx(1.0)
        assert canvas.pixels[99, 0, 0] < 1.0

    def test_render_layers_resets_blend_mode(self):
        canvas = render_layers(Canvas(_photo()), build_layers(64, 48, TRIPLE))
        assert canvas.blend_mode == 'source-over'

    def test_pixels_stay_single_precision(self):
        canvas = render_layers(Canvas(_photo()), build_layers(64, 48, TRIPLE))
        assert canvas.pixels.dtype == np.float32

    def test_unknown_blend_mode(self):
        with pytest.raises(ContractViolation):
            Canvas(_photo()).set_blend_mode('overlay')


class TestCompositeOverlay:
    def test_same_size(self):
        out = composite_overlay(_photo(64, 48), TRIPLE)
        assert out.size == (64, 48)
        assert out.mode == 'RGB'

    def test_black_square_single_entry(self):
        black = Image.new('RGB', (100, 100), (0, 0, 0))
        out = composite_overlay(black, CHAKRAS[:1])
        assert out.size == (100, 100)
        assert np.asarray(out).max() > 0

    def test_does_not_modify_input(self):
        photo = _photo()
        before = photo.tobytes()
        composite_overlay(photo, TRIPLE)
        assert photo.tobytes() == before

    def test_changes_pixels(self):
        photo = _photo()
        assert composite_overlay(photo, TRIPLE).tobytes() != photo.tobytes()

    def test_deterministic(self):
        photo = _photo()
        assert composite_overlay(photo, TRIPLE).tobytes() == composite_overlay(photo, TRIPLE).tobytes()

    def test_accepts_encoded_bytes(self):
        out = composite_overlay(encode_jpeg(_photo(32, 20)), TRIPLE[:2])
        assert out.size == (32, 20)

    def test_rgba_source(self):
        out = composite_overlay(Image.new('RGBA', (20, 30), (10, 20, 30, 0)), TRIPLE)
        assert out.size == (20, 30)

    def test_undecodable(self):
        with pytest.raises(DecodeError):
            composite_overlay(b'definitely not an image', TRIPLE)

    def test_empty_selection(self):
        with pytest.raises(ContractViolation):
            composite_overlay(_photo(), ())
