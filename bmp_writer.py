import logging

from bmp_errors import InvalidImageError
from bmp_utils import set_bytes, write_file_bytes

logger = logging.getLogger(__name__)


class BMPWriter:
    FILE_HEADER_SIZE = 14
    DIB_HEADER_SIZE = 40
    BITS_PER_PIXEL = 24
    RESOLUTION = 2835  # pixels per meter, about 72 DPI

    def header(self, width, height):
        """Build the 54-byte file + DIB header for a 24-bit image."""
        padding = (4 - (width * 3) % 4) % 4
        array_bytes = (width * 3 + padding) * height
        offset = self.FILE_HEADER_SIZE + self.DIB_HEADER_SIZE

        header = bytearray(offset)
        # File header
        header[0:2] = b'BM'
        set_bytes(header, 2, 4, offset + array_bytes)   # Size of BMP file
        set_bytes(header, 6, 2, 0)                      # Reserved
        set_bytes(header, 8, 2, 0)                      # Reserved
        set_bytes(header, 10, 4, offset)                # Pixel array offset

        # DIB header
        dib = self.FILE_HEADER_SIZE
        set_bytes(header, dib + 0, 4, self.DIB_HEADER_SIZE)
        set_bytes(header, dib + 4, 4, width)
        set_bytes(header, dib + 8, 4, height)
        set_bytes(header, dib + 12, 2, 1)               # Color planes
        set_bytes(header, dib + 14, 2, self.BITS_PER_PIXEL)
        set_bytes(header, dib + 16, 4, 0)               # BI_RGB
        set_bytes(header, dib + 20, 4, array_bytes)     # Raw bitmap size, padding included
        set_bytes(header, dib + 24, 4, self.RESOLUTION)
        set_bytes(header, dib + 28, 4, self.RESOLUTION)
        set_bytes(header, dib + 32, 4, 0)               # Palette colors
        set_bytes(header, dib + 36, 4, 0)               # Important colors
        return bytes(header)

    def encode(self, image):
        if not image or not image[0]:
            raise InvalidImageError("Cannot encode an empty image")
        width = len(image[0])
        height = len(image)
        if any(len(row) != width for row in image):
            raise InvalidImageError("All rows must have the same number of pixels")

        padding = bytes((4 - (width * 3) % 4) % 4)
        out = bytearray(self.header(width, height))

        # Pixel array: left to right, bottom row first, BGR
        for row in reversed(image):
            for r, g, b in row:
                out.append(b & 0xFF)
                out.append(g & 0xFF)
                out.append(r & 0xFF)
            out.extend(padding)

        return bytes(out)


def encode(image):
    return BMPWriter().encode(image)


def write_image(filepath, image):
    """Encode image and save it to filepath. Returns True on success."""
    data = encode(image)
    if not write_file_bytes(filepath, data):
        return False
    logger.info("Wrote %s (%d bytes, %dx%d)", filepath, len(data), len(image[0]), len(image))
    return True
