import gzip
from io import BytesIO
from typing import BinaryIO, Union

from . import BUFFER_SIZE


class Compressor:
    """Compresses data to a file or stream in gzip format."""

    def __init__(self, f):
        """
        Parameters
        ----------
        f: Union[str, Path, BinaryIO]
            Path/FileHandle/Stream to write compressed data to.
            If a path is given, the file is created (truncating any existing file)
            and closed on :meth:`close`.
            A caller-supplied stream is never closed by the compressor.
        """
        if not hasattr(f, "write"):  # It's probably a path-like object.
            f = open(str(f), "wb")
            close_f_on_close = True
        else:
            close_f_on_close = False

        self.f = f
        self.close_f_on_close = close_f_on_close

        # Empty filename and zero mtime keep the header independent of the destination.
        self._gzip_file = gzip.GzipFile(filename="", mode="wb", fileobj=f, mtime=0)

    def write(self, data: Union[bytes, bytearray, memoryview]) -> int:
        """Compress ``data`` to stream.

        Parameters
        ----------
        data: Union[bytes, bytearray, memoryview]
            Data to be compressed.

        Returns
        -------
        int
            Number of uncompressed bytes consumed.
        """
        return self._gzip_file.write(data)

    def flush(self) -> None:
        """Flushes buffered compressed data to the underlying stream.

        The output remains a valid, unfinished gzip member;
        the trailer is only written by :meth:`close`.
        """
        self._gzip_file.flush()

    def close(self) -> None:
        """Writes the gzip trailer and closes the output file, if gzkit opened it."""
        try:
            self._gzip_file.close()
        finally:
            if self.close_f_on_close:
                self.f.close()

    @property
    def closed(self) -> bool:
        return self._gzip_file.closed

    def __enter__(self) -> "Compressor":
        """Use :class:`Compressor` as a context manager.

        .. code-block:: python

           with gzkit.Compressor("output.gz") as f:
               f.write(b"foo")
        """
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        """Calls :meth:`~Compressor.close` on contextmanager exit."""
        self.close()


class TextCompressor(Compressor):
    """Compresses UTF-8 encoded text to a file or stream."""

    def write(self, data: str) -> int:
        return super().write(data.encode("utf-8"))


def compress_stream(src: BinaryIO, dst: BinaryIO) -> None:
    """Compress everything readable from ``src`` into ``dst``.

    ``src`` is read to exhaustion in :data:`~gzkit.BUFFER_SIZE` chunks.
    The gzip trailer is always written before returning or raising,
    but ``dst`` itself is left open.

    Parameters
    ----------
    src: BinaryIO
        Readable binary stream providing ``readinto``.
    dst: BinaryIO
        Writable binary stream receiving the gzip member.
    """
    buf = bytearray(BUFFER_SIZE)
    view = memoryview(buf)
    with Compressor(dst) as c:
        while True:
            count = src.readinto(buf)
            if not count:
                break
            c.write(view[:count])


def compress(data: Union[bytes, bytearray, memoryview]) -> bytes:
    """Single-call to compress data.

    Parameters
    ----------
    data: Union[bytes, bytearray, memoryview]
        Data to compress.

    Returns
    -------
    bytes
        Compressed data, a single gzip member.
    """
    with BytesIO(data) as src, BytesIO() as dst:
        compress_stream(src, dst)
        return dst.getvalue()


def compress_string(text: str) -> bytes:
    """UTF-8 encode ``text`` and compress it."""
    return compress(text.encode("utf-8"))
