"""Tests for the pixel transforms."""

from __future__ import annotations

import copy

import pytest

import bmp_transforms
from bmp_errors import InvalidParameterError
from bmp_transforms import (
    BLACK, BLUE, GREEN, RED, WHITE,
    clarendon, darken, enlarge, grayscale, high_contrast, lighten,
    quantize, rotate, rotate_90, to_channel, vignette,
)


def solid(rows, cols, pixel):
    return [[pixel] * cols for _ in range(rows)]


class TestToChannel:
    def test_truncates_toward_zero(self) -> None:
        assert to_channel(29.9) == 29
        assert to_channel(-0.5) == 0

    def test_wraps_to_eight_bits(self) -> None:
        assert to_channel(256) == 0
        assert to_channel(400) == 144
        assert to_channel(-20) == 236

    def test_clamp(self) -> None:
        assert to_channel(400, clamp=True) == 255
        assert to_channel(-20, clamp=True) == 0
        assert to_channel(100.7, clamp=True) == 100


class TestVignette:
    def test_single_pixel_unchanged(self) -> None:
        assert vignette([[(10, 20, 30)]]) == [[(10, 20, 30)]]

    def test_corners_darker(self) -> None:
        gray = (100, 100, 100)
        result = vignette(solid(2, 2, gray))
        # Center is (1, 1); corner (0, 0) is sqrt(2) away
        assert result == [
            [(29, 29, 29), (50, 50, 50)],
            [(50, 50, 50), (100, 100, 100)],
        ]

    def test_far_pixels_wrap(self) -> None:
        result = vignette(solid(1, 4, (100, 100, 100)))
        # Factor is (1 - 2) / 1 at column 0
        assert result[0][0] == (156, 156, 156)
        assert result[0][1] == (0, 0, 0)
        assert result[0][2] == (100, 100, 100)

    def test_far_pixels_clamped(self) -> None:
        assert vignette(solid(1, 4, (100, 100, 100)), clamp=True)[0][0] == BLACK


class TestClarendon:
    @pytest.mark.parametrize(
        "pixel, expected",
        [
            ((200, 200, 200), (227, 227, 227)),
            ((170, 170, 170), (212, 212, 212)),
            ((169, 170, 170), (169, 170, 170)),
            ((90, 90, 90), (90, 90, 90)),
            ((89, 89, 89), (44, 44, 44)),
            ((40, 40, 40), (20, 20, 20)),
        ],
    )
    def test_half_factor(self, pixel, expected) -> None:
        assert clarendon([[pixel]], 0.5) == [[expected]]

    def test_large_factor_wraps(self) -> None:
        # 255 - 55 * 5 = -20
        assert clarendon([[(200, 200, 200)]], 5) == [[(236, 236, 236)]]
        assert clarendon([[(200, 200, 200)]], 5, clamp=True) == [[BLACK]]

    def test_rejects_non_numeric_factor(self) -> None:
        with pytest.raises(InvalidParameterError):
            clarendon([[(0, 0, 0)]], "0.5")

    @pytest.mark.parametrize("factor", [float("inf"), float("nan"), 10**400])
    def test_rejects_non_finite_factor(self, factor) -> None:
        with pytest.raises(InvalidParameterError):
            clarendon([[(0, 0, 0)]], factor)
        with pytest.raises(InvalidParameterError):
            darken([[(1, 2, 3)]], factor)
        with pytest.raises(InvalidParameterError):
            lighten([[(1, 2, 3)]], factor)


class TestGrayscale:
    def test_channels_equal_truncated_average(self, gradient_5x7) -> None:
        result = grayscale(gradient_5x7)
        for row_in, row_out in zip(gradient_5x7, result):
            for (r, g, b), out in zip(row_in, row_out):
                assert out == ((r + g + b) // 3,) * 3

    def test_truncates(self) -> None:
        assert grayscale([[(10, 20, 31)]]) == [[(20, 20, 20)]]


class TestRotate:
    def test_rotate_90_2x3(self, image_2x3) -> None:
        result = rotate_90(image_2x3)
        assert len(result) == 3
        assert all(len(row) == 2 for row in result)
        for r in range(2):
            for c in range(3):
                assert result[c][1 - r] == image_2x3[r][c]

    def test_rotate_by_four_is_identity(self, gradient_5x7) -> None:
        assert rotate(gradient_5x7, 4) == gradient_5x7
        four = gradient_5x7
        for _ in range(4):
            four = rotate_90(four)
        assert four == gradient_5x7

    def test_zero_returns_copy(self, image_2x3) -> None:
        result = rotate(image_2x3, 0)
        assert result == image_2x3
        assert result is not image_2x3
        assert result[0] is not image_2x3[0]

    def test_counts_wrap(self, image_2x3) -> None:
        assert rotate(image_2x3, 1) == rotate_90(image_2x3)
        assert rotate(image_2x3, 5) == rotate_90(image_2x3)
        assert rotate(image_2x3, -1) == rotate(image_2x3, 3)
        assert rotate(image_2x3, -2) == rotate(image_2x3, 2)

    def test_half_turn(self, image_2x3) -> None:
        expected = [list(reversed(row)) for row in reversed(image_2x3)]
        assert rotate(image_2x3, 2) == expected

    def test_rejects_non_integer(self, image_2x3) -> None:
        with pytest.raises(InvalidParameterError):
            rotate(image_2x3, 1.0)


class TestEnlarge:
    def test_single_pixel(self) -> None:
        result = enlarge([[(10, 20, 30)]], 2, 3)
        assert result == [[(10, 20, 30)] * 2 for _ in range(3)]

    def test_nearest_neighbor(self, image_2x3) -> None:
        result = enlarge(image_2x3, 2, 1)
        p = image_2x3[0]
        assert result[0] == [p[0], p[0], p[1], p[1], p[2], p[2]]
        assert len(result) == 2

    @pytest.mark.parametrize("x_scale, y_scale", [(0, 1), (1, 0), (-2, 2), (1.5, 1), (True, 1)])
    def test_rejects_bad_scale(self, x_scale, y_scale) -> None:
        with pytest.raises(InvalidParameterError):
            enlarge([[(0, 0, 0)]], x_scale, y_scale)


class TestHighContrast:
    def test_boundary_gray_is_white(self) -> None:
        assert high_contrast([[(127, 127, 127)]]) == [[WHITE]]

    def test_just_below_boundary_is_black(self) -> None:
        # (126 + 127 + 127) // 3 == 126
        assert high_contrast([[(126, 127, 127)]]) == [[BLACK]]

    def test_only_black_and_white(self, gradient_5x7) -> None:
        result = high_contrast(gradient_5x7)
        assert {p for row in result for p in row} <= {WHITE, BLACK}


class TestLightenDarken:
    def test_lighten(self) -> None:
        assert lighten([[(100, 0, 255)]], 0.5) == [[(177, 127, 255)]]

    def test_lighten_wraps(self) -> None:
        # 255 - 255 * 2 = -255
        assert lighten([[(0, 0, 0)]], 2) == [[(1, 1, 1)]]
        assert lighten([[(0, 0, 0)]], 2, clamp=True) == [[BLACK]]

    def test_darken(self) -> None:
        assert darken([[(101, 50, 1)]], 0.5) == [[(50, 25, 0)]]

    def test_darken_wraps(self) -> None:
        assert darken([[(200, 100, 0)]], 2) == [[(144, 200, 0)]]
        assert darken([[(200, 100, 0)]], 2, clamp=True) == [[(255, 200, 0)]]


class TestQuantize:
    @pytest.mark.parametrize(
        "pixel, expected",
        [
            ((200, 200, 150), WHITE),
            ((50, 50, 49), BLACK),
            ((100, 50, 50), RED),
            ((50, 100, 50), GREEN),
            ((50, 50, 100), BLUE),
            ((100, 100, 50), BLUE),
            ((50, 100, 100), BLUE),
            ((80, 80, 80), BLUE),
        ],
    )
    def test_pixel(self, pixel, expected) -> None:
        assert quantize([[pixel]]) == [[expected]]


@pytest.mark.parametrize(
    "func, args",
    [
        (bmp_transforms.vignette, ()),
        (bmp_transforms.clarendon, (0.7,)),
        (bmp_transforms.grayscale, ()),
        (bmp_transforms.rotate_90, ()),
        (bmp_transforms.rotate, (3,)),
        (bmp_transforms.enlarge, (2, 2)),
        (bmp_transforms.high_contrast, ()),
        (bmp_transforms.lighten, (0.3,)),
        (bmp_transforms.darken, (0.3,)),
        (bmp_transforms.quantize, ()),
    ],
)
def test_input_not_modified(func, args, gradient_5x7) -> None:
    before = copy.deepcopy(gradient_5x7)
    result = func(gradient_5x7, *args)
    assert gradient_5x7 == before
    assert result is not gradient_5x7
