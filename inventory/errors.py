"""
Error types for the Inventory Count application.
"""


class InventoryAppError(Exception):
    """Base class for application errors."""


class AuthenticationError(InventoryAppError):
    """Username/password pair was rejected."""


class RecordLoadError(InventoryAppError):
    """A stored record could not be fetched."""


class PersistError(InventoryAppError):
    """Writing rows back to the record store failed."""


class SpreadsheetImportError(InventoryAppError):
    """An uploaded workbook could not be turned into rows."""


class PermissionDeniedError(InventoryAppError):
    """The current role lacks the capability for an operation."""


class NoRecordLoadedError(InventoryAppError):
    """Operation needs a loaded record but none is selected."""
