"""Tests for aura_reader.core.mapper: hash mapping and the seed fallback."""

from dataclasses import replace

import pytest
from aura_reader.core.mapper import colour_hash, seed_of, select_palette, select_palette_from_seed
from aura_reader.core.palette import CHAKRAS
from aura_reader.core.types import ContractViolation, RGBSample

RED, ORANGE, YELLOW, GREEN, BLUE, INDIGO, VIOLET = CHAKRAS


def _names(selection) -> list[str]:
    return [c.name for c in selection]


class TestColourHash:
    def test_weights(self):
        assert colour_hash([(1, 1, 1)]) == 6
        assert colour_hash([(10, 0, 0), (0, 10, 0), (0, 0, 10)]) == 60

    def test_samples_and_tuples_agree(self):
        assert colour_hash([RGBSample(32, 64, 96, 5)]) == colour_hash([(32, 64, 96)])


class TestSelectPalette:
    def test_even_hash_selects_two(self):
        # hash 0 -> indices 0, 17 % 7 = 3
        assert select_palette([(0, 0, 0)]) == (RED, GREEN)

    def test_odd_hash_selects_three(self):
        # hash 1 -> indices 1, 18 % 7 = 4, 35 % 7 = 0
        assert select_palette([(1, 0, 0)]) == (ORANGE, BLUE, RED)

    def test_quantized_sample(self):
        # hash = 192 + 2*96 + 3*32 = 480 -> 480 % 7 = 4, 497 % 7 = 0
        assert select_palette([RGBSample(192, 96, 32, 10)]) == (BLUE, RED)

    def test_never_duplicates(self):
        for h in range(200):
            sel = select_palette([(h, 0, 0)])
            assert len(sel) in (2, 3)
            assert len(set(sel)) == len(sel)

    def test_size_follows_parity(self):
        for h in range(50):
            assert len(select_palette([(h, 0, 0)])) == 2 + h % 2

    def test_probes_forward_on_collision(self):
        palette = tuple(replace(RED, name=f'c{i}') for i in range(17))
        # hash 1: 1, then 18 % 17 = 1 taken -> 2, then 35 % 17 = 1 -> 2 -> 3
        assert _names(select_palette([(1, 0, 0)], palette=palette)) == ['c1', 'c2', 'c3']

    def test_deterministic(self):
        samples = [RGBSample(224, 160, 96, 40), RGBSample(32, 32, 32, 12), RGBSample(0, 64, 128, 3)]
        assert select_palette(samples) == select_palette(list(samples))

    def test_order_matters_only_through_hash(self):
        a = [(32, 0, 0), (0, 32, 0)]
        assert select_palette(a) == select_palette(list(reversed(a)))

    def test_empty_raises(self):
        with pytest.raises(ContractViolation):
            select_palette([])


class TestSelectPaletteFromSeed:
    def test_exactly_two(self):
        for n in range(0, 400, 7):
            sel = select_palette_from_seed((bytes(range(256)) * 2)[:n])
            assert len(sel) == 2
            assert sel[0] != sel[1]

    def test_zero_bytes(self):
        # seed 300 -> 300 % 7 = 6; (300 * 7) % 7 = 0
        assert select_palette_from_seed(bytes(300)) == (VIOLET, RED)

    def test_collision_advances(self):
        # seed 301 -> index 0 both times, second advances to 1
        data = bytearray(300)
        data[100] = 1
        assert select_palette_from_seed(bytes(data)) == (RED, ORANGE)

    def test_offset_100_changes_result(self):
        a = bytearray(300)
        b = bytearray(300)
        b[100] = 3
        assert seed_of(bytes(a)) % 7 != seed_of(bytes(b)) % 7
        assert select_palette_from_seed(bytes(a)) != select_palette_from_seed(bytes(b))

    def test_offset_200_counts(self):
        data = bytearray(300)
        data[200] = 9
        assert seed_of(bytes(data)) == 309

    def test_other_offsets_ignored(self):
        data = bytearray(300)
        data[150] = 200
        assert select_palette_from_seed(bytes(data)) == select_palette_from_seed(bytes(300))

    def test_text_uses_code_points(self):
        # 300 + ord('a') * 2 = 494 -> 494 % 7 = 4
        assert select_palette_from_seed('a' * 300) == (BLUE, RED)

    def test_short_input_reads_zero_past_end(self):
        assert seed_of(b'abc') == 3
        assert select_palette_from_seed(b'abc') == (GREEN, RED)

    def test_empty_input(self):
        assert select_palette_from_seed(b'') == (RED, ORANGE)

    def test_deterministic(self):
        data = bytes(range(256)) * 3
        assert select_palette_from_seed(data) == select_palette_from_seed(bytes(data))
