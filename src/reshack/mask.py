"""Resource mask normalization."""

from __future__ import annotations

from typing import NamedTuple

EMPTY_MASK = ",,"
MASK_FIELDS = 3


class ResourceMask(NamedTuple):
    """A ``type,name,language`` selector understood by the editor."""

    type: str = ""
    name: str = ""
    language: str = ""

    @classmethod
    def parse(cls, raw: str | None) -> ResourceMask:
        if not raw:
            return cls()
        parts = raw.split(",")
        parts.extend([""] * (MASK_FIELDS - len(parts)))
        return cls(*parts[:MASK_FIELDS])

    def __str__(self) -> str:
        return ",".join(self)


def normalize_mask(raw: str | None) -> str:
    """Pad or truncate ``raw`` to exactly three comma-separated fields.

    Field values are passed through untouched; the editor decides what is valid.
    """
    return str(ResourceMask.parse(raw))
