import logging

from bmp_errors import BMPFormatError
from bmp_settings import get_settings
from bmp_utils import get_int, get_signed_int, read_file_bytes

logger = logging.getLogger(__name__)

HEADER_SIZE = 54
SUPPORTED_BPP = (24, 32)


class BMPParser:
    def __init__(self, bmp_bytes, strict=False):
        self.bmp_bytes = bmp_bytes
        self.strict = strict
        self.metadata = {}      # Header fields (width, height, etc.)
        self.pixel_data = []    # Rows of (R, G, B), top row first
        self.padding = 0        # Zero bytes after each row

    def parse(self):
        self._parse_header()
        self._check_geometry()
        self._parse_pixel_data()
        return self.pixel_data

    def _parse_header(self):
        b = self.bmp_bytes
        if len(b) < HEADER_SIZE:
            raise BMPFormatError(f"File too small to be a BMP ({len(b)} bytes)")
        # Signature (must start with 'BM')
        if b[0:2] != b'BM':
            raise BMPFormatError("Not a BMP file")

        self.metadata['file_size'] = get_int(b, 2, 4)
        # Offset where pixel data starts
        self.metadata['data_offset'] = get_int(b, 10, 4)
        self.metadata['dib_header_size'] = get_int(b, 14, 4)
        self.metadata['width'] = get_signed_int(b, 18, 4)
        # Negative height means rows are stored top to bottom
        height = get_signed_int(b, 22, 4)
        self.metadata['height'] = abs(height)
        self.metadata['top_down'] = height < 0
        self.metadata['planes'] = get_int(b, 26, 2)
        self.metadata['bpp'] = get_int(b, 28, 2)
        self.metadata['compression'] = get_int(b, 30, 4)
        self.metadata['image_size'] = get_int(b, 34, 4)
        self.metadata['x_resolution'] = get_int(b, 38, 4)
        self.metadata['y_resolution'] = get_int(b, 42, 4)
        logger.debug("BMP header: %s", self.metadata)

    def _check_geometry(self):
        meta = self.metadata
        width = meta['width']
        height = meta['height']
        bpp = meta['bpp']

        if bpp not in SUPPORTED_BPP:
            raise BMPFormatError(f"Unsupported bpp: {bpp}")
        if width <= 0 or height == 0:
            raise BMPFormatError(f"Invalid dimensions: {width}x{height}")

        if self.strict:
            if meta['planes'] != 1:
                raise BMPFormatError(f"Invalid planes: {meta['planes']} (must be 1)")
            if meta['compression'] != 0:
                raise BMPFormatError("Compressed BMPs are not supported")
            if meta['dib_header_size'] < 40:
                raise BMPFormatError(f"Unsupported DIB header size: {meta['dib_header_size']}")

        # Each row is padded to a multiple of 4 bytes
        scanline_size = width * (bpp // 8)
        padding = (4 - scanline_size % 4) % 4
        expected = meta['data_offset'] + (scanline_size + padding) * height
        if meta['file_size'] != expected:
            raise BMPFormatError(
                f"Header size {meta['file_size']} does not match geometry ({expected} bytes)"
            )
        if len(self.bmp_bytes) < expected:
            raise BMPFormatError(f"File truncated: {len(self.bmp_bytes)} of {expected} bytes")

        self.padding = padding

    def _parse_pixel_data(self):
        width = self.metadata['width']
        height = self.metadata['height']
        bytes_per_pixel = self.metadata['bpp'] // 8
        b = self.bmp_bytes

        self.pixel_data = [None] * height
        # The file stores the bottom row first unless the image is top-down
        if self.metadata['top_down']:
            row_order = range(height)
        else:
            row_order = range(height - 1, -1, -1)

        pos = self.metadata['data_offset']
        for row in row_order:
            row_pixels = []
            for col in range(width):
                # BGR order; a 32-bit pixel's alpha byte is skipped
                blue, green, red = b[pos:pos + 3]
                row_pixels.append((red, green, blue))
                pos += bytes_per_pixel
            self.pixel_data[row] = row_pixels
            pos += self.padding


def decode(bmp_bytes, strict=None):
    """Decode a BMP byte string into rows of (R, G, B) pixels.

    Returns an empty list if the data is not a BMP this parser understands.
    When `strict` is None the ``strict_header`` setting applies.
    """
    if strict is None:
        strict = get_settings().strict_header
    parser = BMPParser(bmp_bytes, strict=strict)
    try:
        return parser.parse()
    except BMPFormatError as e:
        logger.warning("Could not decode BMP: %s", e)
        return []


def read_image(filepath, strict=None):
    try:
        bmp_bytes = read_file_bytes(filepath)
    except OSError as e:
        logger.error("Could not read %s: %s", filepath, e)
        return []
    return decode(bmp_bytes, strict=strict)
