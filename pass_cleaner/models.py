"""Entry and Group value types shared by every pipeline stage."""

from dataclasses import dataclass, field, replace
from enum import Enum


class Status(str, Enum):
    """Triage decision for a single entry."""

    KEEP = "keep"
    DELETE = "delete"
    REVIEW = "review"


# Header name in the browser export -> Entry attribute.
FIELD_MAP = {
    "name": "name",
    "url": "url",
    "username": "username",
    "password": "password",
    "date_created": "time_created",
    "date_last_used": "time_last_used",
    "date_password_changed": "time_password_changed",
}

# Column order of the cleaned export.
EXPORT_HEADER = tuple(FIELD_MAP)


@dataclass(frozen=True)
class Entry:
    """One password record from the export.

    All text fields are kept exactly as exported. The password is never
    inspected or transformed.
    """

    name: str = ""
    url: str = ""
    username: str = ""
    password: str = field(default="", repr=False)
    time_created: str = ""
    time_last_used: str = ""
    time_password_changed: str = ""
    status: Status = Status.REVIEW

    def with_status(self, status):
        """Return a copy of this entry with a different status."""
        return replace(self, status=Status(status))

    def to_row(self):
        """Return the export row for this entry, keyed by CSV header."""
        return {header: getattr(self, attr) for header, attr in FIELD_MAP.items()}


@dataclass(frozen=True)
class Group:
    """All entries sharing one canonical domain key, in encounter order."""

    domain_key: str
    entries: tuple = ()

    def __len__(self):
        return len(self.entries)
