import logging

logger = logging.getLogger(__name__)


def get_int(data, offset, size):
    # Little-endian: byte 0 is the least significant
    result = 0
    base = 1
    for i in range(size):
        result += data[offset + i] * base
        base *= 256
    return result


def get_signed_int(data, offset, size):
    value = get_int(data, offset, size)
    sign_bit = 1 << (size * 8 - 1)
    if value & sign_bit:
        value -= 1 << (size * 8)
    return value


def set_bytes(buffer, offset, size, value):
    # Writes the low `size` bytes of value, least significant first
    for i in range(size):
        buffer[offset + i] = (value >> (i * 8)) & 0xFF


def read_file_bytes(filepath):
    with open(filepath, "rb") as f:
        return f.read()


def write_file_bytes(filepath, data):
    """Write data to filepath. Returns False if the file can't be written."""
    try:
        with open(filepath, "wb") as f:
            f.write(data)
    except OSError as e:
        logger.error("Could not write %s: %s", filepath, e)
        return False
    return True
