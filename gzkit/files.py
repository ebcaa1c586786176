"""File-to-file gzip transcoding using the ``.gz`` companion naming rule.

Neither function removes its input. If transcoding fails partway, the partially
written output file is left on disk for the caller to inspect or delete.
"""

import logging
import os
from pathlib import Path

from .compressor import compress_stream
from .decompressor import decompress_stream

logger = logging.getLogger(__name__)

SUFFIX = ".gz"


def _check_output_free(output_file: str) -> None:
    # Pre-flight only; opening with "xb" catches anything created after this check.
    if os.path.exists(output_file):
        raise FileExistsError(f"File {output_file} already exists")


def compress_file(input_file) -> Path:
    """Compress ``input_file`` to ``input_file + ".gz"``.

    Parameters
    ----------
    input_file: Union[str, Path]
        File to compress. The suffix is always appended,
        even if the name already ends in ``.gz``.

    Returns
    -------
    Path
        Path of the written compressed file.

    Raises
    ------
    FileExistsError
        The output file already exists. Nothing is opened or modified.
    """
    input_file = os.fspath(input_file)
    output_file = input_file + SUFFIX
    _check_output_free(output_file)

    logger.debug("Compressing %s -> %s", input_file, output_file)
    with open(input_file, "rb") as src, open(output_file, "xb") as dst:
        compress_stream(src, dst)
        logger.debug("Wrote %d compressed bytes to %s", dst.tell(), output_file)

    return Path(output_file)


def decompress_file(input_file) -> Path:
    """Decompress ``input_file`` to the same path without its ``.gz`` suffix.

    Parameters
    ----------
    input_file: Union[str, Path]
        File to decompress. Must end in ``.gz`` (any case).

    Returns
    -------
    Path
        Path of the written decompressed file.

    Raises
    ------
    ValueError
        ``input_file`` does not end in ``.gz``.
    FileExistsError
        The output file already exists. Nothing is opened or modified.
    CorruptDataError
        ``input_file`` is not valid gzip data. The partial output is kept.
    """
    input_file = os.fspath(input_file)
    if input_file[-len(SUFFIX) :].lower() != SUFFIX:
        raise ValueError(f"File must have {SUFFIX} extension (parameter 'input_file', got {input_file!r}).")

    output_file = input_file[: -len(SUFFIX)]
    _check_output_free(output_file)

    logger.debug("Decompressing %s -> %s", input_file, output_file)
    with open(input_file, "rb") as src, open(output_file, "xb") as dst:
        decompress_stream(src, dst)
        logger.debug("Wrote %d decompressed bytes to %s", dst.tell(), output_file)

    return Path(output_file)
