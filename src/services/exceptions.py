"""
Service-level exceptions.

The cycle calculations themselves never raise; these exceptions belong to
the boundary layers (persistence, partner links) around them.
"""

class CycleEngineError(Exception):
    """Base exception for the application."""
    pass

class StorageError(CycleEngineError):
    """Raised when the persisted journal cannot be read or written."""
    pass

class InvalidPartnerPayloadError(CycleEngineError):
    """Raised when a partner link payload cannot be decoded."""
    pass
