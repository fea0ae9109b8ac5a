"""Pure status updates and queries over a collection of groups.

A collection is a tuple of Group. Updates never modify their input; they
return a new tuple in which only the touched group is rebuilt, so earlier
snapshots remain valid for undo.
"""

from collections import Counter

from pass_cleaner.models import Group, Status


def _index_of(groups, domain_key):
    for i, group in enumerate(groups):
        if group.domain_key == domain_key:
            return i
    return None


def _replace_group(groups, index, entries):
    updated = Group(domain_key=groups[index].domain_key, entries=tuple(entries))
    return groups[:index] + (updated,) + groups[index + 1:]


def find_group(groups, domain_key):
    """Return the group with this key, or None."""
    i = _index_of(groups, domain_key)
    return None if i is None else groups[i]


def set_entry_status(groups, domain_key, entry_index, status):
    """Set the status of one entry.

    Unknown keys and out-of-range indices leave the collection as it was.
    """
    status = Status(status)
    groups = tuple(groups)
    i = _index_of(groups, domain_key)
    if i is None:
        return groups

    entries = list(groups[i].entries)
    if not 0 <= entry_index < len(entries):
        return groups

    entries[entry_index] = entries[entry_index].with_status(status)
    return _replace_group(groups, i, entries)


def set_group_status(groups, domain_key, status):
    """Set the same status on every entry of a group."""
    status = Status(status)
    groups = tuple(groups)
    i = _index_of(groups, domain_key)
    if i is None:
        return groups
    return _replace_group(groups, i, [e.with_status(status) for e in groups[i].entries])


def flatten(groups):
    """All entries in group order, then entry order, whatever their status."""
    return tuple(entry for group in groups for entry in group.entries)


def filter_status(entries, exclude=()):
    """Drop entries whose status is in exclude."""
    excluded = {Status(s) for s in exclude}
    return tuple(e for e in entries if e.status not in excluded)


def status_counts(groups):
    counts = Counter(entry.status for entry in flatten(groups))
    return {status: counts.get(status, 0) for status in Status}


def duplicate_groups(groups):
    """Groups holding more than one entry for the same domain."""
    return tuple(g for g in groups if len(g) > 1)
