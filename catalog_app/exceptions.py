"""
Error kinds raised by the catalog core.

Malformed input uses Django's own ``ValidationError`` (with a field -> messages
dict) so forms, models and the workflow all speak the same language.
"""


class CatalogError(Exception):
    """Base class for catalog errors that are not validation errors."""


class NotFoundError(CatalogError):
    def __init__(self, kind, identifier):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} {identifier} not found")


class InvalidTransition(CatalogError):
    def __init__(self, current, requested):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot move enquiry from '{current}' to '{requested}'")


class ChannelError(CatalogError):
    """The notification channel (mail or relay) failed or timed out."""
