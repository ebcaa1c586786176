import gzip
import subprocess
import unittest
import zlib

import pytest

from gzkit import CorruptDataError, compress, compress_string, decompress, decompress_to_string

expected = b"foo foo foo"


class TestDecompressor(unittest.TestCase):
    def test_reference_encoders(self):
        compressobj = zlib.compressobj(level=1, wbits=31)
        encoders = {
            "gzip": lambda data: gzip.compress(data, mtime=1234),
            "zlib": lambda data: compressobj.compress(data) + compressobj.flush(),
        }
        for name, encode in encoders.items():
            with self.subTest(encoder=name):
                self.assertEqual(decompress(encode(expected)), expected)

    def test_header_with_file_name(self):
        compressed = bytearray(gzip.compress(expected, mtime=0))
        compressed[3] = 0x08  # FNAME
        compressed[10:10] = b"foo.txt\x00"
        self.assertEqual(decompress(bytes(compressed)), expected)

    def test_multiple_members(self):
        compressed = compress(b"foo ") + gzip.compress(b"bar")
        self.assertEqual(decompress(compressed), b"foo bar")

    def test_trailing_zero_padding(self):
        self.assertEqual(decompress(compress(expected) + b"\x00" * 16), expected)

    def test_empty_input(self):
        self.assertEqual(decompress(b""), b"")

    def test_bad_magic(self):
        compressed = bytearray(compress(expected))
        compressed[0] = 0x00
        compressed[1] = 0x00
        with self.assertRaises(CorruptDataError) as cm:
            decompress(bytes(compressed))
        self.assertIsInstance(cm.exception.__cause__, gzip.BadGzipFile)

    def test_bad_compression_method(self):
        compressed = bytearray(compress(expected))
        compressed[2] = 7
        with self.assertRaises(CorruptDataError):
            decompress(bytes(compressed))

    def test_bad_crc(self):
        compressed = bytearray(compress(expected))
        compressed[-8] ^= 0xFF
        with self.assertRaises(CorruptDataError):
            decompress(bytes(compressed))

    def test_bad_length(self):
        compressed = bytearray(compress(expected))
        compressed[-4] ^= 0xFF
        with self.assertRaises(CorruptDataError):
            decompress(bytes(compressed))

    def test_truncated(self):
        compressed = compress(expected * 100)
        for size in (5, 12, len(compressed) // 2, len(compressed) - 1):
            with self.subTest(size=size), self.assertRaises(CorruptDataError):
                decompress(compressed[:size])

    def test_invalid_deflate_data(self):
        compressed = bytearray(compress(expected))
        compressed[10] = 0xFF  # reserved block type
        with self.assertRaises(CorruptDataError):
            decompress(bytes(compressed))

    def test_trailing_garbage(self):
        with self.assertRaises(CorruptDataError):
            decompress(compress(expected) + b"garbage")


class TestDecompressToString(unittest.TestCase):
    def test_basic(self):
        self.assertEqual(decompress_to_string(compress_string("foo foo foo")), "foo foo foo")

    def test_invalid_utf8(self):
        compressed = compress(b"\xff\xfe\xfd")
        with self.assertRaises(UnicodeDecodeError):
            decompress_to_string(compressed)

    def test_corrupt_before_decode(self):
        compressed = bytearray(compress(b"\xff\xfe\xfd"))
        compressed[0] = 0x00
        with self.assertRaises(CorruptDataError):
            decompress_to_string(bytes(compressed))


@pytest.mark.external
class TestGzipBinary(unittest.TestCase):
    def test_gzip_decodes_our_output(self):
        result = subprocess.run(["gzip", "-dc"], input=compress(expected), capture_output=True, check=True)
        self.assertEqual(result.stdout, expected)

    def test_we_decode_gzip_output(self):
        result = subprocess.run(["gzip", "-c"], input=expected, capture_output=True, check=True)
        self.assertEqual(decompress(result.stdout), expected)
