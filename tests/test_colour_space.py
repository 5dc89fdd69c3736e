"""Tests for deltae_vision.core.colour_space — sRGB to LAB and hex helpers."""

import pytest
from deltae_vision.core.colour_space import hex_to_rgb, rgb_to_hex, rgb_to_lab


class TestRgbToLab:
    def test_black_is_origin(self):
        L, a, b = rgb_to_lab((0, 0, 0))
        assert L == pytest.approx(0, abs=1e-6)
        assert a == pytest.approx(0, abs=1e-6)
        assert b == pytest.approx(0, abs=1e-6)

    def test_white(self):
        L, a, b = rgb_to_lab((255, 255, 255))
        assert L == pytest.approx(100, abs=1e-3)
        assert a == pytest.approx(0, abs=1e-3)
        assert b == pytest.approx(0, abs=1e-3)

    def test_pure_red(self):
        L, a, b = rgb_to_lab((255, 0, 0))
        assert L == pytest.approx(53.2408, abs=1e-2)
        assert a == pytest.approx(80.0925, abs=1e-2)
        assert b == pytest.approx(67.2032, abs=1e-2)

    def test_greys_are_neutral(self):
        for v in (1, 10, 50, 128, 200, 254):
            _L, a, b = rgb_to_lab((v, v, v))
            assert abs(a) < 1e-3
            assert abs(b) < 1e-3

    def test_lightness_increases_with_grey_level(self):
        values = [rgb_to_lab((v, v, v))[0] for v in range(0, 256, 15)]
        assert values == sorted(values)

    def test_dark_values_use_linear_segment(self):
        # (1, 1, 1) is below both the sRGB and the CIE f(t) thresholds
        L, _a, _b = rgb_to_lab((1, 1, 1))
        assert 0 < L < 1

    def test_pure(self):
        assert rgb_to_lab((12, 200, 99)) == rgb_to_lab((12, 200, 99))

    def test_lab_ranges(self):
        for rgb in [(0, 0, 255), (0, 255, 0), (255, 0, 255), (255, 255, 0)]:
            L, a, b = rgb_to_lab(rgb)
            assert 0 <= L <= 100
            assert -128 <= a <= 128
            assert -128 <= b <= 128


class TestHexToRgb:
    def test_white(self):
        assert hex_to_rgb('#ffffff') == (255, 255, 255)

    def test_black(self):
        assert hex_to_rgb('#000000') == (0, 0, 0)

    def test_uppercase(self):
        assert hex_to_rgb('#FFFFFF') == (255, 255, 255)

    def test_short_hex(self):
        assert hex_to_rgb('#fff') == (255, 255, 255)

    def test_no_hash(self):
        assert hex_to_rgb('ff0000') == (255, 0, 0)

    def test_invalid_hex_raises(self):
        for bad in ('invalid', '#ff', '#ffffffff', '#gggggg', ''):
            with pytest.raises(ValueError):
                hex_to_rgb(bad)


class TestRgbToHex:
    def test_lowercase_padded(self):
        assert rgb_to_hex((1, 171, 255)) == '#01abff'

    def test_roundtrip_named(self):
        assert hex_to_rgb(rgb_to_hex((37, 99, 235))) == (37, 99, 235)
