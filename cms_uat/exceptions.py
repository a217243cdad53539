"""Errors raised by the UAT helpers."""

from typing import List, Optional


class CmsUatError(Exception):
    pass


class ConfigError(CmsUatError, ValueError):
    """Missing or invalid configuration, environment name or secret."""


class DatasetError(CmsUatError):
    """A migration or lookup CSV is missing or has the wrong columns."""


class DeliveryApiError(CmsUatError):
    """The delivery API could not be reached or returned something unusable."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ContentMismatchError(DeliveryApiError, AssertionError):
    """
    Delivery API content did not match the migration record.

    Carries every failed check so one run reports all mismatches for a code.
    """

    def __init__(self, query: str, failures: List[str], status_code: Optional[int] = None):
        self.query = query
        self.failures = list(failures)
        message = f"{query}: " + "; ".join(self.failures)
        super().__init__(message, status_code=status_code)
