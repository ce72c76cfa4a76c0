class VocabbError(Exception):
    """Base class for all vocabb errors."""


class StoreError(VocabbError):
    """Raised by store adapters when loading or persisting fails."""


class ImportFormatError(VocabbError):
    """Raised when an import file is missing required columns."""
