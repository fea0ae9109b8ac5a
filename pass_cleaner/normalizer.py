"""Map decoded export rows onto Entry values."""

from pass_cleaner.models import FIELD_MAP, Entry, Status


def normalize_record(row):
    """Build an Entry from one decoded row.

    Headers outside FIELD_MAP are ignored and missing ones become empty
    strings. Every new entry starts in review.
    """
    values = {}
    for header, attr in FIELD_MAP.items():
        value = row.get(header)
        values[attr] = '' if value is None else str(value)
    return Entry(status=Status.REVIEW, **values)


def normalize_records(rows, logger=None):
    """Normalize every decoded row, one Entry per row, in order."""
    entries = [normalize_record(row) for row in rows]

    if logger and rows:
        ignored = sorted(set(rows[0]) - set(FIELD_MAP))
        missing = sorted(set(FIELD_MAP) - set(rows[0]))
        if ignored:
            logger.debug(f"Ignoring columns: {ignored}")
        if missing:
            logger.warning(f"Export has no {missing} columns; using empty values")
    return entries
