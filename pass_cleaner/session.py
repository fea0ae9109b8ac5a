"""Triage state for one interactive session."""

import threading

from pass_cleaner import triage
from pass_cleaner.decoder import decode_csv
from pass_cleaner.encoder import encode_csv
from pass_cleaner.exceptions import ImportInProgressError, ParseError
from pass_cleaner.grouper import group_by_domain
from pass_cleaner.normalizer import normalize_records


def build_groups(raw, logger=None):
    """Run decode -> normalize -> group on raw export content."""
    rows = decode_csv(raw, logger)
    entries = normalize_records(rows, logger)
    return group_by_domain(entries, logger)


class TriageSession:
    """Holds the current group collection and its undo history.

    Every update replaces the collection with a new tuple; callers reading
    ``groups`` get an immutable snapshot. Nothing is written to disk.
    """

    def __init__(self, logger=None):
        self.logger = logger
        self._groups = ()
        self._history = []
        self._import_lock = threading.Lock()

    @property
    def groups(self):
        return self._groups

    def import_csv(self, raw, on_complete=None):
        """Replace the session state with the groups built from raw.

        Either the whole import succeeds or the previous state is kept.
        ``on_complete(groups, error)`` is called with the outcome when
        given. Raises ImportInProgressError if another import is running.
        """
        if not self._import_lock.acquire(blocking=False):
            raise ImportInProgressError("An import is already in progress")
        try:
            try:
                groups = build_groups(raw, self.logger)
            except ParseError as e:
                if self.logger:
                    self.logger.error(f"Import failed: {e}")
                if on_complete:
                    on_complete(None, e)
                raise
            self._groups = groups
            self._history = []
        finally:
            self._import_lock.release()

        if on_complete:
            on_complete(groups, None)
        return groups

    def _apply(self, updated):
        if updated is not self._groups:
            self._history.append(self._groups)
            self._groups = updated
        return self._groups

    def set_entry_status(self, domain_key, entry_index, status):
        return self._apply(triage.set_entry_status(self._groups, domain_key, entry_index, status))

    def set_group_status(self, domain_key, status):
        return self._apply(triage.set_group_status(self._groups, domain_key, status))

    def undo(self):
        """Restore the collection from before the last update."""
        if not self._history:
            return False
        self._groups = self._history.pop()
        return True

    def entries(self, exclude=()):
        return triage.filter_status(triage.flatten(self._groups), exclude)

    def export_csv(self, exclude=()):
        """Encode the current entries, optionally leaving out some statuses."""
        return encode_csv(self.entries(exclude))
