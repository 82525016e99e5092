"""Exceptions raised by the invoice editor's collaborators."""


class InvoiceError(Exception):
    """Base class for invoice editor errors."""


class StorageError(InvoiceError):
    """Writing the saved invoice slot failed."""


class ExportError(InvoiceError):
    """Rendering the invoice PDF failed."""
