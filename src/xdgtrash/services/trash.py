# Filename: trash.py
# Author: Rich Lewis @RichLewis007
# Description: Utilities for safely moving files to the freedesktop.org home trash. Reserves
#              a metadata name, records the original path and deletion date, then relocates
#              the item into Trash/files.

from __future__ import annotations

import errno
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from ..errors import DestinationMissingError, TrashError
from ..models.trash_info import TrashInfo
from .config import TrashConfig, ensure_trash_dir
from .relocate import move_path
from .reserve import reserve_info_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TrashFiles:
    # Where a trashed item ended up: its content and its metadata file.

    trash_file: Path
    info_file: Path


def canonicalize(path: str | os.PathLike[str]) -> Path:
    """Return the absolute location of ``path`` with its parent fully resolved.

    The last segment is kept as-is so a symlink is trashed as the link itself
    rather than its target. Raises ``FileNotFoundError`` when nothing exists at
    ``path`` and ``TrashError`` for the filesystem root.

    ``..`` is never collapsed as text: ``link/../x`` names whatever the
    kernel reaches through ``link``.
    """
    absolute = Path(path).absolute()
    if absolute.name in {"", ".", ".."}:
        canonical = absolute.resolve(strict=True)
        if not canonical.name:
            raise TrashError(f"refusing to trash {canonical}")
        return canonical
    canonical = absolute.parent.resolve(strict=True) / absolute.name
    if not os.path.lexists(canonical):
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), os.fspath(path))
    return canonical


class TrashMover:
    """Moves files and directories into a home trash.

    The trash location comes from ``config`` (``$XDG_DATA_HOME/Trash`` when
    omitted) so tests can point the mover at a temporary directory.
    """

    def __init__(
        self,
        config: TrashConfig | None = None,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config or TrashConfig.from_environment()
        self._clock = clock

    def move_to_trash(self, path: str | os.PathLike[str]) -> TrashFiles:
        """Trash ``path`` and return the locations it was recorded under.

        The returned content path is only a snapshot: other programs may
        restore or purge the item at any time afterwards. If relocation fails
        the metadata file that was already written is left in place.
        """
        source = canonicalize(path)

        with reserve_info_file(self.config.info_dir, source.name) as reservation:
            info = TrashInfo(
                internal_name=reservation.internal_name,
                path=os.fsencode(source),
                deletion_date=self._clock(),
            )
            info.write(reservation.handle)
        info_file = reservation.path
        trash_file = self.config.files_dir / info.internal_name

        try:
            self._relocate(source, trash_file)
        except OSError:
            logger.warning("Could not move %s to trash; leaving %s behind", source, info_file)
            raise

        logger.info("Moved %s to trash as %s", source, info.internal_name)
        return TrashFiles(trash_file=trash_file, info_file=info_file)

    def _relocate(self, source: Path, trash_file: Path) -> None:
        # Create Trash/files on demand and retry the move once.
        try:
            move_path(source, trash_file)
        except DestinationMissingError:
            logger.debug("Creating trash files directory %s", self.config.files_dir)
            ensure_trash_dir(self.config.files_dir)
            move_path(source, trash_file)


def move_to_trash(
    path: str | os.PathLike[str],
    *,
    config: TrashConfig | None = None,
) -> TrashFiles:
    # Move a file or directory to the user's home trash.
    return TrashMover(config).move_to_trash(path)
