# Filename: trash_info.py
# Author: Rich Lewis @RichLewis007
# Description: Data model and codec for .trashinfo metadata files. Serializes the original
#              path (percent-encoded bytes) and deletion date of a trashed item, and parses
#              existing metadata back into records.

from __future__ import annotations

import configparser
import io
import os
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TextIO
from urllib.parse import quote, unquote_to_bytes

from ..errors import MalformedTrashInfoError, MissingKeyError, MissingSectionError

SECTION = "Trash Info"
PATH_KEY = "Path"
DATE_KEY = "DeletionDate"
INFO_SUFFIX = ".trashinfo"

DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}")

# Bytes outside letters, digits, "_.-~" and this set are written as %XX.
_SAFE_PATH_CHARS = "/"


class _TrashInfoParser(configparser.ConfigParser):
    # INI parser that keeps key case and treats "%" as data.

    def __init__(self) -> None:
        super().__init__(interpolation=None, strict=True)

    def optionxform(self, optionstr: str) -> str:
        return optionstr


def validate_internal_name(name: str) -> str:
    # Reject names that cannot be a single entry inside info/ or files/.
    if not name or "/" in name or name in {".", ".."}:
        raise ValueError(f"invalid trash entry name: {name!r}")
    return name


def format_deletion_date(value: datetime) -> str:
    # isoformat zero-pads years below 1000, unlike strftime("%Y") on glibc.
    return value.replace(microsecond=0, tzinfo=None).isoformat(timespec="seconds")


def parse_deletion_date(value: str) -> datetime:
    if not _DATE_RE.fullmatch(value):
        raise MalformedTrashInfoError(f"{DATE_KEY} {value!r} does not match {DATE_FORMAT}")
    try:
        return datetime.strptime(value, DATE_FORMAT)
    except ValueError as exc:
        raise MalformedTrashInfoError(f"invalid {DATE_KEY} {value!r}") from exc


def encode_path(path: bytes) -> str:
    return quote(path, safe=_SAFE_PATH_CHARS)


def decode_path(value: str) -> bytes:
    # Malformed escapes such as "%zz" are kept verbatim rather than rejected.
    return unquote_to_bytes(value.encode("utf-8", "surrogateescape"))


@dataclass(frozen=True, slots=True)
class TrashInfo:
    """Metadata describing one item in the trash.

    ``internal_name`` links the record to ``info/<internal_name>.trashinfo`` and
    ``files/<internal_name>``; it comes from the metadata filename and is never
    written into the document. ``path`` holds the raw bytes of the original
    absolute path so names that are not valid UTF-8 survive unchanged.
    ``deletion_date`` is naive local time truncated to whole seconds.
    """

    internal_name: str
    path: bytes
    deletion_date: datetime

    def __post_init__(self) -> None:
        validate_internal_name(self.internal_name)
        date = self.deletion_date
        if date.tzinfo is not None:
            date = date.astimezone().replace(tzinfo=None)
        object.__setattr__(self, "deletion_date", date.replace(microsecond=0))

    @classmethod
    def new(cls, internal_name: str, path: bytes) -> TrashInfo:
        # Build a record stamped with the current local time.
        return cls(internal_name=internal_name, path=path, deletion_date=datetime.now())

    @classmethod
    def parse(cls, internal_name: str, content: str) -> TrashInfo:
        """Parse the text of a .trashinfo file.

        Raises ``MalformedTrashInfoError`` when the text is not valid INI or the
        date is not ``YYYY-MM-DDTHH:MM:SS``, ``MissingSectionError`` without a
        ``[Trash Info]`` section and ``MissingKeyError`` when ``Path`` or
        ``DeletionDate`` is absent.
        """
        parser = _TrashInfoParser()
        try:
            parser.read_string(content)
        except configparser.MissingSectionHeaderError as exc:
            # Keys before any header belong to no section, so [Trash Info] is absent.
            raise MissingSectionError(SECTION) from exc
        except configparser.Error as exc:
            raise MalformedTrashInfoError(f"unreadable trash info: {exc}") from exc

        if not parser.has_section(SECTION):
            raise MissingSectionError(SECTION)
        section = parser[SECTION]

        raw_path = section.get(PATH_KEY)
        if raw_path is None:
            raise MissingKeyError(PATH_KEY)
        raw_date = section.get(DATE_KEY)
        if raw_date is None:
            raise MissingKeyError(DATE_KEY)

        return cls(
            internal_name=internal_name,
            path=decode_path(raw_path),
            deletion_date=parse_deletion_date(raw_date),
        )

    @classmethod
    def from_file(cls, info_file: Path) -> TrashInfo:
        # Read a metadata file, taking the internal name from its filename.
        name = info_file.name
        if name.endswith(INFO_SUFFIX):
            name = name[: -len(INFO_SUFFIX)]
        return cls.parse(name, info_file.read_text(encoding="utf-8"))

    @property
    def original_path(self) -> Path:
        return Path(os.fsdecode(self.path))

    def serialize(self) -> str:
        parser = _TrashInfoParser()
        parser[SECTION] = {
            PATH_KEY: encode_path(self.path),
            DATE_KEY: format_deletion_date(self.deletion_date),
        }
        buffer = io.StringIO()
        parser.write(buffer, space_around_delimiters=False)
        return buffer.getvalue().rstrip("\n") + "\n"

    def write(self, handle: TextIO) -> None:
        handle.write(self.serialize())
