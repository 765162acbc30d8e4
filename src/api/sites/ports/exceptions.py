"""Exceptions raised across the tenant record store port.

A missing tenant or entry is not an exception: lookups return None and
resolution returns SiteNotFound.
"""


class StoreUnavailableError(Exception):
    """Raised when the underlying store times out, throttles or is unreachable.

    Transient and distinct from "not found": callers may retry a bounded
    number of times, then surface a generic 5xx without the message.
    """

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(message)
        self.operation = operation


class InvalidKeySchemeError(Exception):
    """Raised when a record's keys break the single-table key scheme.

    This is a programmer or data error (for example a record whose sort key
    does not belong to any entity type, or whose partition key belongs to a
    different tenant). It is not handled gracefully.
    """

    pass


class MalformedTenantRecordError(Exception):
    """Raised when a tenant config record is missing required attributes.

    Resolution never returns a partially populated configuration, so a
    record that cannot be parsed fails resolution outright.
    """

    pass


class InvalidPageTokenError(ValueError):
    """Raised when a pagination token is malformed or belongs to another tenant."""

    pass
