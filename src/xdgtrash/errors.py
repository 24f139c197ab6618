# Filename: errors.py
# Author: Rich Lewis @RichLewis007
# Description: Exception hierarchy for trash operations. Separates metadata parse failures
#              from filesystem failures raised while moving items into the trash.

from __future__ import annotations

import errno
import os


class TrashError(Exception):
    """Base class for errors raised by xdg-trash itself.

    Filesystem failures are not wrapped: they surface as the original
    ``OSError`` so callers can inspect ``errno`` and ``filename``.
    """


class TrashInfoError(TrashError, ValueError):
    # A .trashinfo document could not be turned into a record.
    pass


class MissingSectionError(TrashInfoError):
    def __init__(self, section: str) -> None:
        super().__init__(f"missing [{section}] section")
        self.section = section


class MissingKeyError(TrashInfoError):
    def __init__(self, key: str) -> None:
        super().__init__(f"missing {key!r} key")
        self.key = key


class MissingValueError(TrashInfoError):
    # Reserved for keys that are present but empty; not raised by the parser yet.
    def __init__(self, key: str) -> None:
        super().__init__(f"no value for {key!r}")
        self.key = key


class MalformedTrashInfoError(TrashInfoError):
    # Raised with the underlying configparser or date error as __cause__.
    pass


class DestinationMissingError(FileNotFoundError):
    """The directory that should receive a moved item does not exist."""

    def __init__(self, directory: os.PathLike[str] | str) -> None:
        super().__init__(
            errno.ENOENT,
            "Destination directory does not exist",
            os.fspath(directory),
        )
