# Filename: relocate.py
# Author: Rich Lewis @RichLewis007
# Description: Move primitive used to relocate trashed content. Moves a file, symlink or
#              directory tree without ever replacing an existing destination, and reports a
#              missing destination directory separately from other failures.

from __future__ import annotations

import errno
import logging
import os
import shutil
from pathlib import Path

from ..errors import DestinationMissingError

logger = logging.getLogger(__name__)

# link() failures that mean "no hard links here" rather than a real error.
_NO_LINK_ERRNOS = frozenset(
    code
    for code in (
        errno.EXDEV,
        errno.EPERM,
        errno.EMLINK,
        getattr(errno, "ENOTSUP", None),
        getattr(errno, "EOPNOTSUPP", None),
    )
    if code is not None
)


def _occupied(dst: Path) -> bool:
    # Dangling symlinks count as occupied.
    return os.path.lexists(dst)


def _exists_error(dst: Path) -> FileExistsError:
    return FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), os.fspath(dst))


def _link_then_unlink(src: Path, dst: Path) -> bool:
    # Return False when the filesystem cannot hard link src to dst.
    try:
        os.link(src, dst, follow_symlinks=False)
    except OSError as exc:
        if exc.errno in _NO_LINK_ERRNOS:
            return False
        raise
    os.unlink(src)
    return True


def move_path(src: Path, dst: Path) -> None:
    """Move ``src`` to ``dst``, refusing to overwrite.

    Raises ``FileExistsError`` if anything (even a dangling symlink) already
    occupies ``dst`` and ``DestinationMissingError`` if ``dst.parent`` is not a
    directory.

    Files and symlinks are hard linked into place and then unlinked, so an
    entry that appears at ``dst`` at any moment makes the move fail with
    ``EEXIST``. Directories, and files on filesystems without hard links or on
    another device, go through ``shutil.move`` after an existence check; an
    entry created between that check and the rename can still be replaced.
    """
    if _occupied(dst):
        raise _exists_error(dst)
    if not dst.parent.is_dir():
        raise DestinationMissingError(dst.parent)

    if src.is_dir() and not src.is_symlink():
        logger.debug("Moving directory %s -> %s", src, dst)
        shutil.move(os.fspath(src), os.fspath(dst))
        return

    logger.debug("Moving file %s -> %s", src, dst)
    if _link_then_unlink(src, dst):
        return

    logger.debug("Hard link unavailable for %s, copying instead", dst)
    if _occupied(dst):
        raise _exists_error(dst)
    shutil.move(os.fspath(src), os.fspath(dst))
