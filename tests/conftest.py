"""Shared fixtures: small pixel grids and hand-built BMP files."""

from __future__ import annotations

import struct

import pytest

from bmp_settings import get_settings


def build_bmp(pixels, bpp=24, top_down=False, file_size=None, planes=1, compression=0, dib_size=40):
    """Build BMP bytes with struct, independently of bmp_writer."""
    height = len(pixels)
    width = len(pixels[0])
    bytes_per_pixel = bpp // 8
    padding = (4 - (width * bytes_per_pixel) % 4) % 4
    rows = pixels if top_down else list(reversed(pixels))
    body = bytearray()
    for row in rows:
        for r, g, b in row:
            body += bytes((b, g, r))
            if bpp == 32:
                body.append(0xFF)
        body += bytes(padding)
    if file_size is None:
        file_size = 54 + len(body)
    header = struct.pack("<2sIHHI", b"BM", file_size, 0, 0, 54)
    header += struct.pack(
        "<IiiHHIIiiII",
        dib_size, width, -height if top_down else height, planes, bpp,
        compression, len(body), 2835, 2835, 0, 0,
    )
    return header + bytes(body)


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Clear BMP_* variables and the settings cache around every test."""
    for name in ("BMP_CLAMP_CHANNELS", "BMP_STRICT_HEADER", "BMP_LOG_LEVEL", "BMP_DEFAULT_SCALE_FACTOR"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def image_2x3():
    """2 rows by 3 columns, every pixel distinct."""
    return [
        [(10, 20, 30), (40, 50, 60), (70, 80, 90)],
        [(100, 110, 120), (130, 140, 150), (160, 170, 180)],
    ]


@pytest.fixture()
def gradient_5x7():
    return [
        [((r * 37 + c * 11) % 256, (r * 13 + c * 53) % 256, (r * 71 + c * 29) % 256) for c in range(7)]
        for r in range(5)
    ]


@pytest.fixture()
def make_bmp():
    return build_bmp
