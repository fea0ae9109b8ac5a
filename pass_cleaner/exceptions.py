"""Exceptions raised by pass_cleaner.

Only ParseError reaches the user during normal operation. Missing fields,
unknown domain keys and out-of-range indices fall back to defaults instead
of raising.
"""


class PassCleanerError(Exception):
    """Base class for all pass_cleaner errors."""


class ParseError(PassCleanerError):
    """The CSV export could not be read; the whole import is aborted."""


class ImportInProgressError(PassCleanerError):
    """A second import was started while another one was still running."""


class ConfigError(PassCleanerError):
    """An explicitly requested configuration file could not be loaded."""
