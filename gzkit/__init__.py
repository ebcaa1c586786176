__version__ = "0.0.0"

BUFFER_SIZE = 0x4000


class GzkitError(Exception):
    """Base class for errors raised by gzkit."""


class CorruptDataError(GzkitError, ValueError):
    """Input is not a valid gzip container.

    Raised for a bad header, truncated data, invalid DEFLATE blocks,
    or a CRC-32/length trailer that does not match the decoded data.
    """


from .compressor import Compressor, TextCompressor, compress, compress_stream, compress_string
from .decompressor import Decompressor, TextDecompressor, decompress, decompress_stream, decompress_to_string
from .files import compress_file, decompress_file


def open(f, mode="rb"):
    if "r" in mode and "w" in mode:
        raise ValueError

    if "r" in mode:  # Decompressor
        return Decompressor(f) if "b" in mode else TextDecompressor(f)
    elif "w" in mode:  # Compressor
        return Compressor(f) if "b" in mode else TextCompressor(f)
    else:
        raise ValueError
