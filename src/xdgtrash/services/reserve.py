# Filename: reserve.py
# Author: Rich Lewis @RichLewis007
# Description: Exclusive reservation of .trashinfo filenames. Claims a free metadata file in
#              the trash info directory with O_EXCL, adding a numeric suffix on collision and
#              creating the directory on first use.

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType
from typing import TextIO

from ..models.trash_info import INFO_SUFFIX, validate_internal_name
from .config import ensure_trash_dir

logger = logging.getLogger(__name__)

_CREATE_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_EXCL
_INFO_FILE_MODE = 0o600

# Suffixes start at .2; the unsuffixed name counts as the first copy.
_FIRST_DUPLICATE = 2


@dataclass(slots=True)
class Reservation:
    # An exclusively created metadata file; the caller writes and closes handle.

    handle: TextIO
    path: Path

    @property
    def internal_name(self) -> str:
        return self.path.name[: -len(INFO_SUFFIX)]

    def close(self) -> None:
        self.handle.close()

    def __enter__(self) -> Reservation:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def info_filename(base_name: str, duplicate: int | None = None) -> str:
    # Return "<base>.trashinfo" or "<base>.<duplicate>.trashinfo".
    if duplicate is None:
        return f"{base_name}{INFO_SUFFIX}"
    return f"{base_name}.{duplicate}{INFO_SUFFIX}"


def reserve_info_file(info_dir: Path, base_name: str) -> Reservation:
    """Atomically claim an unused ``.trashinfo`` file inside ``info_dir``.

    Tries ``<base_name>.trashinfo`` first, then ``<base_name>.2.trashinfo``,
    ``<base_name>.3.trashinfo`` and so on until an exclusive create succeeds.
    Uniqueness comes from ``O_EXCL``, so concurrent callers racing on the same
    name always end up with distinct files.

    If ``info_dir`` does not exist it is created once and the same candidate is
    retried. A second ``FileNotFoundError`` and any other ``OSError`` propagate.
    """
    validate_internal_name(base_name)

    duplicate: int | None = None
    created_dir = False
    while True:
        candidate = info_dir / info_filename(base_name, duplicate)
        try:
            fd = os.open(candidate, _CREATE_FLAGS, _INFO_FILE_MODE)
        except FileExistsError:
            duplicate = _FIRST_DUPLICATE if duplicate is None else duplicate + 1
            logger.debug("%s is taken, trying suffix .%d", candidate.name, duplicate)
            continue
        except FileNotFoundError:
            if created_dir:
                raise
            logger.debug("Creating trash info directory %s", info_dir)
            ensure_trash_dir(info_dir)
            created_dir = True
            continue

        try:
            handle = os.fdopen(fd, "w", encoding="utf-8")
        except BaseException:
            os.close(fd)
            raise
        logger.debug("Reserved %s", candidate)
        return Reservation(handle=handle, path=candidate)
