import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Optional

from cyclopts import App, Parameter

import gzkit

app = App(help="Compress/Decompress data in gzip format.", version=gzkit.__version__)


@contextmanager
def open_input(input_: Optional[Path]):
    if input_ is None:
        yield sys.stdin.buffer
    else:
        with input_.open("rb") as f:
            yield f


@contextmanager
def open_output(output: Optional[Path]):
    if output is None:
        yield sys.stdout.buffer
        sys.stdout.buffer.flush()
    else:
        with output.open("wb") as f:
            yield f


def configure_logging(verbose: bool):
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def compress(
    input_: Annotated[Optional[Path], Parameter(name=["--input", "-i"])] = None,
    output: Annotated[Optional[Path], Parameter(name=["--output", "-o"])] = None,
    *,
    stdout: Annotated[bool, Parameter(name=["--stdout", "-c"])] = False,
    verbose: Annotated[bool, Parameter(name=["--verbose", "-v"])] = False,
):
    """Compress an input file or stream.

    Parameters
    ----------
    input_: Optional[Path]
        Input file to compress. Defaults to stdin.
        Without ``--output`` or ``--stdout``, writes ``INPUT.gz`` next to it.
    output: Optional[Path]
        Output compressed file. Defaults to stdout.
    stdout: bool
        Write to stdout even when an input file is given.
    verbose: bool
        Log debug messages to stderr.
    """
    configure_logging(verbose)
    if input_ is not None and output is None and not stdout:
        gzkit.compress_file(input_)
        return

    with open_input(input_) as src, open_output(output) as dst:
        gzkit.compress_stream(src, dst)


@app.command()
def decompress(
    input_: Annotated[Optional[Path], Parameter(name=["--input", "-i"])] = None,
    output: Annotated[Optional[Path], Parameter(name=["--output", "-o"])] = None,
    *,
    stdout: Annotated[bool, Parameter(name=["--stdout", "-c"])] = False,
    verbose: Annotated[bool, Parameter(name=["--verbose", "-v"])] = False,
):
    """Decompress an input file or stream.

    Parameters
    ----------
    input_: Optional[Path]
        Input file to decompress. Defaults to stdin.
        Without ``--output`` or ``--stdout``, it must end in ``.gz``
        and is decompressed to the same name without that suffix.
    output: Optional[Path]
        Output decompressed file. Defaults to stdout.
    stdout: bool
        Write to stdout even when an input file is given.
    verbose: bool
        Log debug messages to stderr.
    """
    configure_logging(verbose)
    if input_ is not None and output is None and not stdout:
        gzkit.decompress_file(input_)
        return

    with open_input(input_) as src, open_output(output) as dst:
        gzkit.decompress_stream(src, dst)


def run_app():
    app()
