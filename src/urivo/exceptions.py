"""src/urivo/exceptions.py

Urivo Exceptions hierarchy.

The :class:`~urivo.uri.Uri` model itself never raises for bad input; these
are raised by the strict helpers in :mod:`urivo.utils.validators`.
"""


class UrivoError(Exception):
    """Base exception for all Urivo errors."""


class ValidationError(UrivoError, ValueError):
    """
    Base exception for values that do not satisfy a component grammar.
    """


class InvalidSchemeError(ValidationError):
    """Scheme is empty or does not start with a letter followed by
    letters, digits, ``+``, ``-``, ``.`` or ``:``."""

    def __init__(self, message: str = "Invalid scheme"):
        super().__init__(message)


class InvalidPortError(ValidationError):
    """Port is not a non-negative whole number."""

    def __init__(self, message: str = "Invalid port"):
        super().__init__(message)
