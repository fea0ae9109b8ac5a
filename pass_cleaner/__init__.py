"""
Clean up browser password exports.

Reads a Chrome/Chromium password CSV, groups the entries by site and lets
you mark each one keep, delete or review before writing a cleaned CSV.
"""
from pass_cleaner.decoder import decode_csv
from pass_cleaner.encoder import OUTPUT_FILENAME, OUTPUT_MIME_TYPE, encode_csv, save_csv
from pass_cleaner.exceptions import ConfigError, ImportInProgressError, ParseError, PassCleanerError
from pass_cleaner.grouper import canonical_domain, group_by_domain
from pass_cleaner.models import EXPORT_HEADER, FIELD_MAP, Entry, Group, Status
from pass_cleaner.normalizer import normalize_record, normalize_records
from pass_cleaner.session import TriageSession, build_groups
from pass_cleaner.triage import (
    duplicate_groups,
    filter_status,
    find_group,
    flatten,
    set_entry_status,
    set_group_status,
    status_counts,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigError", "EXPORT_HEADER", "Entry", "FIELD_MAP", "Group",
    "ImportInProgressError", "OUTPUT_FILENAME", "OUTPUT_MIME_TYPE",
    "ParseError", "PassCleanerError", "Status", "TriageSession",
    "build_groups", "canonical_domain", "decode_csv", "duplicate_groups",
    "encode_csv", "filter_status", "find_group", "flatten", "group_by_domain",
    "normalize_record", "normalize_records", "save_csv", "set_entry_status",
    "set_group_status", "status_counts",
]
