# Filename: __init__.py
# Author: Rich Lewis @RichLewis007
# Description: Top-level package initialization for xdg-trash. Re-exports the public API
#              for moving files and directories into the freedesktop.org home trash.

from .errors import (
    DestinationMissingError,
    MalformedTrashInfoError,
    MissingKeyError,
    MissingSectionError,
    MissingValueError,
    TrashError,
    TrashInfoError,
)
from .models.trash_info import TrashInfo
from .services.config import TrashConfig
from .services.trash import TrashFiles, TrashMover, move_to_trash

__all__ = [
    "DestinationMissingError",
    "MalformedTrashInfoError",
    "MissingKeyError",
    "MissingSectionError",
    "MissingValueError",
    "TrashConfig",
    "TrashError",
    "TrashFiles",
    "TrashInfo",
    "TrashInfoError",
    "TrashMover",
    "__author__",
    "__version__",
    "move_to_trash",
]

__version__ = "0.1.0"
__author__ = "Rich Lewis"
