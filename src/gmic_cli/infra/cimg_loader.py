"""Infrastructure: structured (CImg) and raw loads of command files.

The auto-update file is usually distributed as a CImg container holding
the command text as 8-bit pixels::

    1 uint8 little_endian
    1 52342 1 1 #14210
    <zlib-compressed pixel data>

The first line gives the image count and pixel type; each image then
has a ``width height depth spectrum [#compressed_size]`` line followed by
its data. Lines starting with ``#`` before the first header are
comments.
"""

from __future__ import annotations

import io
import re
import zlib
from pathlib import Path

from gmic_cli.exceptions import CImgFormatError

_CHAR_PIXEL_TYPES: frozenset[str] = frozenset(
    {
        "char",
        "signed_char",
        "schar",
        "unsigned_char",
        "uchar",
        "int8",
        "uint8",
    }
)

_IMAGE_HEADER = re.compile(r"(\d+)\s+(\d+)\s+(\d+)\s+(\d+)(?:\s+#(\d+))?")


def _read_header(stream: io.BytesIO) -> str:
    while True:
        line = stream.readline()
        if not line:
            raise CImgFormatError("Missing CImg header.")
        if not line.startswith(b"#"):
            break
    try:
        return line.decode("ascii").strip()
    except UnicodeDecodeError as exc:
        raise CImgFormatError("CImg header is not ASCII.") from exc


def _read_image(stream: io.BytesIO, index: int) -> bytes:
    try:
        line = stream.readline().decode("ascii").strip()
    except UnicodeDecodeError as exc:
        raise CImgFormatError(f"Header of image {index} is not ASCII.") from exc
    match = _IMAGE_HEADER.fullmatch(line)
    if match is None:
        raise CImgFormatError(f"Invalid header for image {index}: {line!r}")
    width, height, depth, spectrum = (int(match.group(i)) for i in range(1, 5))
    size = width * height * depth * spectrum
    if size == 0:
        return b""

    compressed_size = match.group(5)
    if compressed_size is None:
        data = stream.read(size)
        if len(data) != size:
            raise CImgFormatError(f"Image {index} is truncated.")
        return data

    raw = stream.read(int(compressed_size))
    if len(raw) != int(compressed_size):
        raise CImgFormatError(f"Compressed image {index} is truncated.")
    try:
        data = zlib.decompress(raw)
    except zlib.error as exc:
        raise CImgFormatError(f"Cannot decompress image {index}: {exc}") from exc
    if len(data) != size:
        raise CImgFormatError(f"Image {index} has {len(data)} bytes, expected {size}.")
    return data


def decode_cimg(payload: bytes) -> bytes:
    """Return the concatenated pixel buffers of a CImg container.

    Raises
    ------
    CImgFormatError
        If *payload* is not an 8-bit CImg container.
    """
    stream = io.BytesIO(payload)
    fields = _read_header(stream).split()
    if len(fields) < 2 or not fields[0].isdigit():
        raise CImgFormatError("Not a CImg container.")
    count, pixel_type = int(fields[0]), fields[1].lower()
    if pixel_type not in _CHAR_PIXEL_TYPES:
        raise CImgFormatError(f"Unsupported CImg pixel type {pixel_type!r}.")
    return b"".join(_read_image(stream, index) for index in range(count))


def load_cimg(path: Path | str) -> bytes:
    """Load *path* as a CImg container and unroll it into bytes.

    Raises
    ------
    OSError
        If the file cannot be read.
    CImgFormatError
        If the file is not an 8-bit CImg container.
    """
    return decode_cimg(Path(path).read_bytes())


def load_raw(path: Path | str) -> bytes:
    """Load the bytes of *path* as-is.

    Raises
    ------
    OSError
        If the file cannot be read.
    """
    return Path(path).read_bytes()
