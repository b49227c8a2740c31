"""Decode cover bytes, resize them and save the thumbnail.

The format is guessed from the bytes themselves, never from the entry name.
Only JPEG and PNG covers are accepted, and the thumbnail keeps the format
of its source.
"""

import io
import logging
import os
import struct
import sys

from PIL import Image, UnidentifiedImageError

from cbzcover.errors import (CoverNotFoundError, DecodeError, EncodeError,
                             OutputDirError, UnknownFormatError,
                             UnsupportedFormatError)
from cbzcover.tools import fetch_cover, open_archive

log = logging.getLogger(__name__)

COVER_BASENAME = "cover"
FORMAT_EXTS = {
    "JPEG": ".jpg",
    "PNG": ".png",
    }

DEFAULT_SIZE = 256


def _signature(data):
    """Name of the first format whose magic bytes match, else None."""
    prefix = data[:16]
    if not prefix:
        return None
    Image.init()
    for fmt in Image.ID:
        accept = Image.OPEN[fmt][1]
        try:
            if accept and accept(prefix):
                return fmt
        except (SyntaxError, IndexError, TypeError, struct.error):
            continue
    return None


def _open(data):
    if data is None:
        raise CoverNotFoundError("cover is not found")
    try:
        return Image.open(io.BytesIO(data))
    except UnidentifiedImageError as e:
        # Known magic bytes but a broken header
        fmt = _signature(data)
        if fmt:
            raise DecodeError(f"can't decode {fmt} cover") from e
        raise UnknownFormatError("unknown format") from e
    except OSError as e:
        raise DecodeError(f"can't decode cover: {e}") from e


def sniff_format(data):
    """Guess image format ("JPEG", "PNG", "BMP"...) from raw bytes."""
    return _open(data).format


def decode(data):
    """Decode raw bytes.

    Returns:
        (PIL.Image.Image, str): fully loaded image, and its format

    """
    image = _open(data)
    fmt = image.format
    try:
        image.load()
    except (OSError, SyntaxError, ValueError) as e:
        raise DecodeError(f"can't decode {fmt} cover: {e}") from e
    return image, fmt


def output_ext(fmt):
    try:
        return FORMAT_EXTS[fmt]
    except KeyError:
        raise UnsupportedFormatError(f"unsupported format: {fmt}") from None


def fit_width(width, height, max_width, max_height=sys.maxsize):
    """Scale (width, height) to fit in the box, keeping aspect ratio.

    Scales up as well as down. With the default height bound, only
    max_width matters.
    """
    ratio = min(max_width / width, max_height / height)
    new_w = max(int(width * ratio + 0.5), 1)
    new_h = max(int(height * ratio + 0.5), 1)
    return new_w, new_h


def resize(image, size):
    new_size = fit_width(image.width, image.height, size)
    return image.resize(new_size, Image.Resampling.LANCZOS)


def output_path(output_dir, ext):
    return os.path.join(output_dir, COVER_BASENAME + ext)


def ensure_dir(dir_path):
    """Create dir_path (and parents), it's fine if it already exists."""
    if not dir_path:
        return
    try:
        os.makedirs(dir_path, exist_ok=True)
    except OSError as e:
        raise OutputDirError(f"can't create {dir_path}: {e.strerror or e}") from e  # noqa: E501


def save(image, path, fmt):
    try:
        image.save(path, format=fmt)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(f"can't write {path}: {e}") from e


def make_thumbnail(data, output_dir=".", size=DEFAULT_SIZE, logger=None):
    """Write a `size` wide thumbnail of cover bytes in output_dir.

    Args:
        data (bytes): cover bytes, None if no cover was found
        output_dir (str): destination folder, created if missing
        size (int): width of the thumbnail, in pixels
        logger (logging.Logger): optional logger

    Returns:
        str: canonical path of the thumbnail (cover.jpg or cover.png)

    """
    logger = logger or log
    if size < 1:
        raise ValueError(f"size must be a positive integer, got {size}")

    logger.debug("format: %s", sniff_format(data))
    image, fmt = decode(data)
    logger.debug("size: %dx%d", image.width, image.height)
    ext = output_ext(fmt)

    thumb = resize(image, size)
    logger.debug("thumbnail size: %dx%d", thumb.width, thumb.height)

    output = output_path(output_dir, ext)
    ensure_dir(os.path.dirname(output))
    save(thumb, output, fmt)

    result = os.path.realpath(output)
    logger.debug("output: %s", result)
    return result


# EXTRACT COVER
def extract_cover(arc_name, output_dir=".", size=DEFAULT_SIZE, logger=None):
    """Extract cover of archive (zip, cbz or epub) as a thumbnail.

    Returns the canonical path of the written thumbnail.
    """
    with open_archive(arc_name, logger=logger) as zf:
        cover = fetch_cover(zf, logger=logger)
    return make_thumbnail(cover, output_dir, size, logger=logger)
