import logging
import zipfile
import zlib

from cbzcover.errors import ArchiveFormatError, ArchiveOpenError

log = logging.getLogger(__name__)

COVER_NAMES = ("cover.jpg", "cover.png")
# Matched as is, no case folding
IMAGE_EXTS = (".jpg", ".png", ".jpeg", ".JPG", ".PNG", ".JPEG")


# OPEN ARCHIVE
def open_archive(arc_name, logger=None):
    """Open archive (zip, cbz or epub) for reading.

    Args:
        arc_name (str): path of local archive
        logger (logging.Logger): optional logger

    Returns:
        zipfile.ZipFile: archive, to be used as a context manager

    Raises:
        ArchiveOpenError: path is missing or unreadable
        ArchiveFormatError: file is not a zip container

    """
    logger = logger or log
    logger.debug("input: %s", arc_name)
    try:
        zf = zipfile.ZipFile(arc_name, 'r')
    except zipfile.BadZipFile as e:
        raise ArchiveFormatError(f"{arc_name}: not a valid archive ({e})") from e  # noqa: E501
    except OSError as e:
        raise ArchiveOpenError(f"can't open {arc_name}: {e.strerror or e}") from e  # noqa: E501
    logger.debug("read finish: %s (%d entries)", arc_name, len(zf.infolist()))
    return zf


def is_image(filename):
    return filename.endswith(IMAGE_EXTS)


def _read(zf, info, logger):
    try:
        data = zf.read(info)
    # NotImplementedError: unsupported compression (deflate64...)
    # RuntimeError: encrypted entry
    except (zipfile.BadZipFile, zipfile.LargeZipFile, zlib.error,
            NotImplementedError, RuntimeError) as e:
        raise ArchiveFormatError(f"can't read {info.filename}: {e}") from e
    except OSError as e:
        raise ArchiveOpenError(f"can't read {info.filename}: {e}") from e
    logger.debug("read cover: %s (%d bytes)", info.filename, len(data))
    return data


# EXTRACT COVER
def fetch_cover(zf, logger=None):
    """Return bytes of cover.jpg (or cover.png), else of 1st image found.

    Returns None when the archive holds no image at all.
    """
    logger = logger or log
    for name in COVER_NAMES:
        try:
            info = zf.getinfo(name)
        except KeyError:
            continue
        logger.debug("cover_index: %d (%s)", zf.infolist().index(info), name)
        return _read(zf, info, logger)

    logger.debug("cover_index: None")
    return fetch_first_image(zf, logger=logger)


def fetch_first_image(zf, logger=None):
    """Return bytes of 1st image entry, in archive order (not sorted)."""
    logger = logger or log
    logger.debug("fetch_first_image")
    for info in zf.infolist():
        if is_image(info.filename):
            return _read(zf, info, logger)
    return None
