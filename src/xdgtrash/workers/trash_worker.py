# Filename: trash_worker.py
# Author: Rich Lewis @RichLewis007
# Description: Batch worker for moving paths to the home trash. Trashes each requested path
#              in turn, reporting progress and collecting successes and failures.

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from xdgtrash.errors import TrashError
from xdgtrash.services.trash import TrashFiles, TrashMover

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, Path], None]


@dataclass(slots=True)
class TrashResult:
    # Summary of a trash request, split into successes and failures.

    trashed: list[tuple[Path, TrashFiles]] = field(default_factory=list)
    failed: list[tuple[Path, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class TrashWorker:
    # Moves files and folders to the trash one at a time.

    def __init__(
        self,
        paths: Iterable[Path],
        *,
        mover: TrashMover,
        progress: ProgressCallback | None = None,
    ) -> None:
        self._paths = list(paths)
        self._mover = mover
        self._progress = progress

    def start(self) -> TrashResult:
        # Trash each requested path; a failure does not stop the remaining ones.
        result = TrashResult()
        total = len(self._paths)

        for index, path in enumerate(self._paths, start=1):
            if self._progress is not None:
                self._progress(index, total, path)
            try:
                result.trashed.append((path, self._mover.move_to_trash(path)))
            except (OSError, TrashError) as exc:
                reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
                logger.info("Failed to trash %s: %s", path, reason)
                result.failed.append((path, reason))

        return result
