"""Errors raised while extracting a cover."""


class CoverError(Exception):
    """Base class, reported by the command line as a single message."""


class ArchiveOpenError(CoverError, OSError):
    """Input archive is missing or unreadable."""


class ArchiveFormatError(CoverError):
    """Input is not a valid zip container."""


class CoverNotFoundError(CoverError):
    """No cover.* entry and no image entry in the archive."""


class UnknownFormatError(CoverError):
    """Image format can't be guessed from the cover bytes."""


class UnsupportedFormatError(CoverError):
    """Format was guessed but is neither JPEG nor PNG."""


class DecodeError(CoverError):
    pass


class OutputDirError(CoverError, OSError):
    """Output directory can't be created."""


class EncodeError(CoverError):
    pass
