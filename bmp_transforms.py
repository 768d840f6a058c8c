"""Pixel transforms.

Every function takes rows of (R, G, B) tuples and returns a new grid; the
input is never modified. Results that can leave the 0-255 range are
truncated toward zero and wrapped to 8 bits, the way an unsigned 8-bit
channel store behaves. Pass ``clamp=True`` to clamp them instead.
"""

import math

from bmp_errors import InvalidParameterError

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)


def to_channel(value, clamp=False):
    value = int(value)
    if clamp:
        return max(0, min(255, value))
    return value & 0xFF


def _map_pixels(image, func):
    return [[func(pixel) for pixel in row] for row in image]


def _is_finite(value):
    try:
        return math.isfinite(value)
    except OverflowError:
        # int too large for a float
        return False


def _check_factor(name, value):
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not _is_finite(value):
        raise InvalidParameterError(name, value, f"{name} must be a finite number, got {value!r}")


def _check_int(name, value, minimum=None):
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameterError(name, value, f"{name} must be an integer, got {value!r}")
    if minimum is not None and value < minimum:
        raise InvalidParameterError(name, value, f"{name} must be at least {minimum}, got {value}")


def vignette(image, clamp=False):
    """Darken pixels in proportion to their distance from the center."""
    num_rows = len(image)
    num_columns = len(image[0])
    center_row = num_rows // 2
    center_col = num_columns // 2
    new_image = []
    for row in range(num_rows):
        new_row = []
        for col in range(num_columns):
            distance = math.sqrt((col - center_col) ** 2 + (row - center_row) ** 2)
            factor = (num_rows - distance) / num_rows
            r, g, b = image[row][col]
            new_row.append((
                to_channel(r * factor, clamp),
                to_channel(g * factor, clamp),
                to_channel(b * factor, clamp),
            ))
        new_image.append(new_row)
    return new_image


def _lighten_pixel(pixel, factor, clamp):
    return tuple(to_channel(255 - (255 - c) * factor, clamp) for c in pixel)


def _darken_pixel(pixel, factor, clamp):
    return tuple(to_channel(c * factor, clamp) for c in pixel)


def clarendon(image, scaling_factor, clamp=False):
    """Push light pixels lighter and dark pixels darker."""
    _check_factor("scaling_factor", scaling_factor)

    def adjust(pixel):
        average = sum(pixel) // 3
        if average >= 170:
            return _lighten_pixel(pixel, scaling_factor, clamp)
        if average < 90:
            return _darken_pixel(pixel, scaling_factor, clamp)
        return tuple(pixel)

    return _map_pixels(image, adjust)


def grayscale(image):
    def gray(pixel):
        value = sum(pixel) // 3
        return (value, value, value)

    return _map_pixels(image, gray)


def rotate_90(image):
    """Rotate 90 degrees clockwise; the result is width rows by height columns."""
    num_rows = len(image)
    num_columns = len(image[0])
    new_image = [[None] * num_rows for _ in range(num_columns)]
    for row in range(num_rows):
        for col in range(num_columns):
            new_image[col][num_rows - row - 1] = image[row][col]
    return new_image


def rotate(image, number):
    """Rotate clockwise by number * 90 degrees. Negative numbers turn counter-clockwise."""
    _check_int("number", number)
    turns = number % 4
    if turns == 0:
        return [list(row) for row in image]
    new_image = image
    for _ in range(turns):
        new_image = rotate_90(new_image)
    return new_image


def enlarge(image, x_scale, y_scale):
    """Nearest-neighbor upscale by whole-number factors."""
    _check_int("x_scale", x_scale, minimum=1)
    _check_int("y_scale", y_scale, minimum=1)
    num_rows = len(image) * y_scale
    num_columns = len(image[0]) * x_scale
    return [
        [image[row // y_scale][col // x_scale] for col in range(num_columns)]
        for row in range(num_rows)
    ]


def high_contrast(image):
    threshold = 255 // 2

    def contrast(pixel):
        return WHITE if sum(pixel) // 3 >= threshold else BLACK

    return _map_pixels(image, contrast)


def lighten(image, scaling_factor, clamp=False):
    _check_factor("scaling_factor", scaling_factor)
    return _map_pixels(image, lambda p: _lighten_pixel(p, scaling_factor, clamp))


def darken(image, scaling_factor, clamp=False):
    _check_factor("scaling_factor", scaling_factor)
    return _map_pixels(image, lambda p: _darken_pixel(p, scaling_factor, clamp))


def quantize(image):
    """Reduce every pixel to black, white, red, green or blue."""
    def nearest(pixel):
        r, g, b = pixel
        total = r + g + b
        if total >= 550:
            return WHITE
        if total < 150:
            return BLACK
        if r > g and r > b:
            return RED
        if g > r and g > b:
            return GREEN
        return BLUE

    return _map_pixels(image, nearest)
