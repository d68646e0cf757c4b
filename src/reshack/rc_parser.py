"""Resource script summary parsing.

The editor's ``.rc`` output is only semi-structured, so the parser reads it
line by line and keeps every ``name type`` pair it can recognize. Anything it
cannot read is dropped; parsing never fails.
"""

from __future__ import annotations

import codecs
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

COMMENT_PREFIXES = ("//", "#")
DIRECTIVE_NAMES = frozenset({"LANGUAGE", "CODEPAGE"})
# Manifest ids 1 and 24 collide with words the directive filter would drop.
MANIFEST_NAMES = DIRECTIVE_NAMES | {"1", "24"}
MANIFEST_TYPE = "RT_MANIFEST"
TYPE_COLUMN_WIDTH = 20
RULE_WIDTH = 40
EMPTY_INVENTORY_MESSAGE = "No resources found or failed to parse RC file."

_NAME_TYPE_PATTERN = re.compile(r'^(".*?"|\S+)\s+(\S+)')
_LINE_BREAK = re.compile(r"\r?\n")


@dataclass(frozen=True)
class ResourceEntry:
    """One resource line: its type keyword and its name or numeric id."""

    type: str
    name: str

    def render(self) -> str:
        return f"{self.type.ljust(TYPE_COLUMN_WIDTH)} {self.name}"


@dataclass(frozen=True)
class ResourceInventory:
    entries: tuple[ResourceEntry, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def render(self) -> str:
        if self.is_empty:
            return EMPTY_INVENTORY_MESSAGE
        header = f"{'Type'.ljust(TYPE_COLUMN_WIDTH)} Name/ID"
        rows = [entry.render() for entry in self.entries]
        return "\n".join([header, "-" * RULE_WIDTH, *rows])

    def to_dict(self) -> dict[str, object]:
        return {"resources": [{"type": entry.type, "name": entry.name} for entry in self.entries]}


def parse_line(line: str) -> ResourceEntry | None:
    """Return the entry described by ``line`` or ``None`` when it carries none."""
    trimmed = line.strip()
    if not trimmed or trimmed.startswith(COMMENT_PREFIXES):
        return None

    match = _NAME_TYPE_PATTERN.match(trimmed)
    if match is None:
        return None

    name, type_ = match.group(1), match.group(2)
    if name in MANIFEST_NAMES and type_ == MANIFEST_TYPE:
        return ResourceEntry(type=type_, name=name)
    if name in DIRECTIVE_NAMES:
        return None
    return ResourceEntry(type=type_, name=name)


def parse_lines(lines: Iterable[str]) -> ResourceInventory:
    entries = [entry for entry in map(parse_line, lines) if entry is not None]
    return ResourceInventory(entries=tuple(entries))


def parse_script(text: str) -> ResourceInventory:
    """Parse resource script text into an ordered inventory.

    Duplicates are kept and source order is preserved. An inventory with no
    entries is the "nothing found" result, not an error.
    """
    return parse_lines(_LINE_BREAK.split(text))


def decode_script(data: bytes) -> str:
    """Decode script bytes, honoring a UTF-16 or UTF-8 byte order mark."""
    if data.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        return data.decode("utf-16", errors="replace")
    return data.decode("utf-8-sig", errors="replace")


def read_script(path: Path) -> str:
    """Read a resource script from disk.

    Raises:
        OSError: If the file cannot be read.
    """
    return decode_script(path.read_bytes())
