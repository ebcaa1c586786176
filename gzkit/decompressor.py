import gzip
import zlib
from contextlib import contextmanager
from io import BytesIO
from typing import BinaryIO, Union

from . import BUFFER_SIZE, CorruptDataError


@contextmanager
def _corrupt_data_errors():
    # gzip reports a truncated member as EOFError and bad deflate blocks as zlib.error.
    try:
        yield
    except (gzip.BadGzipFile, zlib.error, EOFError) as e:
        raise CorruptDataError(str(e) or "Invalid gzip data.") from e


class Decompressor:
    """Decompresses a file or stream of gzip-compressed data.

    Concatenated gzip members are decoded as the concatenation of their contents.

    Can be used as a context manager to automatically handle file
    opening and closing:

    .. code-block:: python

        with gzkit.Decompressor("compressed.gz") as f:
            decompressed_data = f.read()
    """

    def __init__(self, f):
        """
        Parameters
        ----------
        f: Union[str, Path, BinaryIO]
            File-like object or path to read compressed bytes from.
            A caller-supplied stream is never closed by the decompressor.
        """
        if not hasattr(f, "read"):  # It's probably a path-like object.
            f = open(str(f), "rb")
            close_f_on_close = True
        else:
            close_f_on_close = False

        self.f = f
        self.close_f_on_close = close_f_on_close

        self._gzip_file = gzip.GzipFile(filename="", mode="rb", fileobj=f)

    def readinto(self, buf: Union[bytearray, memoryview]) -> int:
        """Decompresses data into provided buffer.

        Parameters
        ----------
        buf: Union[bytearray, memoryview]
            Buffer to decode data into.

        Returns
        -------
        int
            Number of bytes decompressed into buffer.
            ``0`` once all members have been decoded.

        Raises
        ------
        CorruptDataError
            Input is not a valid gzip stream.
        """
        with _corrupt_data_errors():
            return self._gzip_file.readinto(buf)

    def read(self, size: int = -1) -> bytes:
        """Decompresses data to bytes.

        Parameters
        ----------
        size: int
            Maximum number of bytes to return.
            If a negative value is provided, all data will be returned.
            Defaults to ``-1``.

        Returns
        -------
        bytes
            Decompressed data.
        """
        with _corrupt_data_errors():
            return self._gzip_file.read(size)

    def close(self):
        """Closes the input file or stream, if gzkit opened it."""
        try:
            self._gzip_file.close()
        finally:
            if self.close_f_on_close:
                self.f.close()

    @property
    def closed(self) -> bool:
        return self._gzip_file.closed

    def __enter__(self):
        """Use :class:`Decompressor` as a context manager.

        .. code-block:: python

           with gzkit.Decompressor("input.gz") as f:
               decompressed_data = f.read()
        """
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        """Calls :meth:`~Decompressor.close` on contextmanager exit."""
        self.close()


class TextDecompressor(Decompressor):
    """Decompresses a file or stream of gzip-compressed data into text."""

    def read(self, size: int = -1) -> str:
        """Decompresses data to UTF-8 decoded text.

        Parameters
        ----------
        size: int
            Maximum number of bytes to decode.
            If a negative value is provided, all data will be returned.
            Defaults to ``-1``.

        Returns
        -------
        str
            Decompressed text.
        """
        return super().read(size).decode("utf-8")


def decompress_stream(src: BinaryIO, dst: BinaryIO) -> None:
    """Decompress the gzip data in ``src`` into ``dst``.

    Parameters
    ----------
    src: BinaryIO
        Readable binary stream of gzip data.
    dst: BinaryIO
        Writable binary stream receiving the decoded bytes. Left open.

    Raises
    ------
    CorruptDataError
        ``src`` is not a valid gzip stream.
        Bytes decoded before the error was detected have already been written to ``dst``.
    """
    buf = bytearray(BUFFER_SIZE)
    view = memoryview(buf)
    with Decompressor(src) as d:
        while True:
            count = d.readinto(buf)
            if not count:
                break
            dst.write(view[:count])


def decompress(data: Union[bytes, bytearray, memoryview]) -> bytes:
    """Single-call to decompress data.

    Parameters
    ----------
    data: Union[bytes, bytearray, memoryview]
        Gzip-compressed data to decompress.

    Returns
    -------
    bytes
        Decompressed data.
    """
    with BytesIO(data) as src, BytesIO() as dst:
        decompress_stream(src, dst)
        return dst.getvalue()


def decompress_to_string(data: Union[bytes, bytearray, memoryview]) -> str:
    """Decompress ``data`` and decode the result as UTF-8.

    Raises
    ------
    CorruptDataError
        ``data`` is not a valid gzip stream.
    UnicodeDecodeError
        The decompressed bytes are not valid UTF-8.
    """
    return decompress(data).decode("utf-8")
