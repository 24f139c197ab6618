# Filename: config.py
# Author: Rich Lewis @RichLewis007
# Description: Configuration helpers for locating the home trash. Resolves the user data
#              directory through platformdirs and exposes the Trash/info and Trash/files
#              locations as an explicit value passed to the trash mover.

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from platformdirs import PlatformDirs

APP_NAME = "xdg-trash"
ORG_NAME = "Rich Lewis"

TRASH_DIR_NAME = "Trash"
INFO_DIR_NAME = "info"
FILES_DIR_NAME = "files"

# Trash directories are private to the user.
_TRASH_DIR_MODE = 0o700


def user_data_home() -> Path:
    # Return $XDG_DATA_HOME, falling back to ~/.local/share on Linux.
    return Path(PlatformDirs().user_data_dir)


def default_log_dir() -> Path:
    # Return the per-user log directory for the CLI.
    dirs = PlatformDirs(appname=APP_NAME, appauthor=ORG_NAME)
    return Path(dirs.user_log_dir)


def ensure_trash_dir(path: Path) -> None:
    # Create path and any missing parents; an existing directory is fine.
    path.mkdir(mode=_TRASH_DIR_MODE, parents=True, exist_ok=True)


@dataclass(frozen=True, slots=True)
class TrashConfig:
    # Location of the home trash, rooted at a user data directory.

    data_home: Path

    @classmethod
    def from_environment(cls) -> TrashConfig:
        return cls(data_home=user_data_home())

    @property
    def trash_dir(self) -> Path:
        return self.data_home / TRASH_DIR_NAME

    @property
    def info_dir(self) -> Path:
        return self.trash_dir / INFO_DIR_NAME

    @property
    def files_dir(self) -> Path:
        return self.trash_dir / FILES_DIR_NAME
