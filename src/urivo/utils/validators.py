"""utils/validators.py

Component grammars for Urivo: scheme, port and the authority-scheme registry.

These helpers are strict and raise :class:`~urivo.exceptions.ValidationError`
subclasses; :class:`~urivo.uri.Uri` wraps them and degrades instead.
"""

import re
from typing import Any, Optional

from urivo.exceptions import InvalidPortError, InvalidSchemeError

__all__ = [
    "AUTHORITY_SCHEMES",
    "SCHEME_REGEX",
    "normalize_scheme",
    "parse_port",
    "uses_authority",
]

# Letter, then letters, digits, "+", "-", "." or ":" (RFC 3986 plus the colon,
# so that nested schemes like "view-source:http" stay valid).
SCHEME_REGEX = re.compile(r"[a-zA-Z][a-zA-Z0-9+\-.:]*", re.ASCII)

_PORT_REGEX = re.compile(r"[0-9]+", re.ASCII)

# Schemes rendered as "scheme://authority"; every other scheme gets "scheme:".
AUTHORITY_SCHEMES = frozenset(
    {
        "file",
        "ftp",
        "ftps",
        "git",
        "gopher",
        "http",
        "https",
        "imap",
        "imaps",
        "ldap",
        "ldaps",
        "nntp",
        "pop",
        "redis",
        "rtsp",
        "sftp",
        "smb",
        "snews",
        "ssh",
        "svn",
        "telnet",
        "ws",
        "wss",
    }
)


def normalize_scheme(value: Any) -> str:
    """
    Normalize a scheme as given by a caller.

    Accepts the bare name or the name decorated the way it usually appears
    in a URI: ``"http"``, ``"HTTP:"``, ``"http://"`` or ``"//http://"``.

    Args:
        value: Candidate scheme.

    Returns:
        The lowercased scheme name, without any ``//`` / ``:`` decoration.

    Raises:
        InvalidSchemeError: If ``value`` is not a non-empty string or what
            is left after stripping is not a valid scheme name.
    """
    if not isinstance(value, str) or not value:
        raise InvalidSchemeError(f"Scheme must be a non-empty string: {value!r}")

    scheme = value[2:] if value.startswith("//") else value
    if scheme.endswith("://"):
        scheme = scheme[:-3]
    elif scheme.endswith(":"):
        scheme = scheme[:-1]
    scheme = scheme.lower()

    if not SCHEME_REGEX.fullmatch(scheme):
        raise InvalidSchemeError(f"Invalid scheme: {value!r}")
    return scheme


def parse_port(value: Any) -> int:
    """
    Convert a port given as ``int``, whole ``float`` or digit string.

    Raises:
        InvalidPortError: For negative or fractional numbers, strings with
            anything but ASCII digits, booleans and non-numeric types.
    """
    if isinstance(value, bool):
        raise InvalidPortError(f"Port must be a number, not a boolean: {value!r}")

    if isinstance(value, int):
        port = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise InvalidPortError(f"Port must be a whole number: {value!r}")
        port = int(value)
    elif isinstance(value, str):
        if not _PORT_REGEX.fullmatch(value):
            raise InvalidPortError(f"Port must contain only digits: {value!r}")
        port = int(value)
    else:
        raise InvalidPortError(f"Unsupported port type: {type(value).__name__}")

    if port < 0:
        raise InvalidPortError(f"Port must not be negative: {value!r}")
    return port


def uses_authority(scheme: Optional[str]) -> bool:
    """Check whether ``scheme`` is rendered with ``//`` before its authority."""
    return scheme in AUTHORITY_SCHEMES
