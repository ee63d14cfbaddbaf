"""src/urivo/uri.py

URI value model: parser, fluent mutators and canonical serializer.
"""

import decimal
import enum
import logging
import math
import re
from typing import Any, Dict, Optional

from urivo.exceptions import InvalidPortError, InvalidSchemeError
from urivo.utils.validators import normalize_scheme, parse_port, uses_authority

__all__ = ["Uri", "Locality", "change_scheme"]

LOGGER = logging.getLogger(__name__)

_SCHEME_PREFIX_REGEX = re.compile(r"(?P<scheme>[a-zA-Z][a-zA-Z0-9+\-.:]*):", re.ASCII)
_HOST_PORT_REGEX = re.compile(r"(?P<host>.*):(?P<port>[0-9]+)", re.ASCII | re.DOTALL)


class Locality(enum.Enum):
    """Explicit relative/absolute flag, consulted only when there is no host."""

    RELATIVE = "relative"
    ABSOLUTE = "absolute"


class Uri:
    """
    Mutable URI value.

    Parses any string into its components, lets each of them be replaced
    through fluent ``set_*`` methods and renders them back with
    :meth:`get_uri` (or ``str()``). Nothing is percent-encoded, decoded or
    normalized: path, query and fragment are kept verbatim.

    Invalid input never raises; the affected component is reset instead
    (``None``, or ``""`` for the path).

    Example::

        >>> uri = Uri("example.org/page.html")
        >>> uri.host is None
        True
        >>> str(uri.set_scheme("https"))
        'https://example.org/page.html'
    """

    __slots__ = (
        "_scheme",
        "_user",
        "_password",
        "_host",
        "_port",
        "_path",
        "_query",
        "_fragment",
        "_locality",
    )

    def __init__(self, value: Any = None) -> None:
        self._scheme: Optional[str] = None
        self._user: Optional[str] = None
        self._password: Optional[str] = None
        self._host: Optional[str] = None
        self._port: Optional[int] = None
        self._path: str = ""
        self._query: Optional[str] = None
        self._fragment: Optional[str] = None
        self._locality = Locality.RELATIVE

        self._parse(self._coerce(value))

    @staticmethod
    def _coerce(value: Any) -> str:
        if isinstance(value, str):
            return value
        # bool is an int subclass; treated as non-scalar
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        if isinstance(value, float):
            if not math.isfinite(value):
                return str(value)
            if value.is_integer():
                return str(int(value))
            # positional notation, no exponent: 1e-07 -> "0.0000001"
            return format(decimal.Decimal(repr(value)), "f")
        if value is not None:
            LOGGER.debug(
                "Non-scalar %s given as URI, using an empty one",
                type(value).__name__,
            )
        return ""

    def _parse(self, text: str) -> None:
        text, sep, fragment = text.partition("#")
        if sep:
            self._fragment = fragment
        text, sep, query = text.partition("?")
        if sep:
            self._query = query

        has_authority = False
        match = _SCHEME_PREFIX_REGEX.match(text)
        if match:
            self._scheme = match.group("scheme").lower()
            text = text[match.end() :]
            if text.startswith("//"):
                has_authority = True
                text = text[2:]
        elif text.startswith("//"):
            has_authority = True
            text = text[2:]

        if not has_authority:
            self._path = text
            return

        host_region, sep, rest = text.partition("/")
        path = sep + rest
        if self._scheme is None and not host_region and not path.strip("/"):
            # schemeless "/////" and the like carry neither an authority nor a path
            path = ""
        self._path = path
        self._parse_authority(host_region)

    def _parse_authority(self, authority: str) -> None:
        userinfo, sep, host_port = authority.rpartition("@")
        if sep:
            user, sep, password = userinfo.partition(":")
            self._user = user
            if sep:
                self._password = password

        match = _HOST_PORT_REGEX.fullmatch(host_port)
        if match:
            self._host = match.group("host")
            self._port = int(match.group("port"))
        else:
            self._host = host_port

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def scheme(self) -> Optional[str]:
        """Lowercased scheme, or ``None`` when schemeless."""
        return self._scheme

    @property
    def user(self) -> Optional[str]:
        return self._user

    @property
    def password(self) -> Optional[str]:
        return self._password

    @property
    def host(self) -> Optional[str]:
        """Host, ``None`` when the URI has no authority (``""`` is an empty one)."""
        return self._host

    @property
    def port(self) -> Optional[int]:
        return self._port

    @property
    def path(self) -> str:
        return self._path

    @property
    def query(self) -> Optional[str]:
        """Query string without the leading ``?``."""
        return self._query

    @property
    def fragment(self) -> Optional[str]:
        """Fragment without the leading ``#``."""
        return self._fragment

    @property
    def locality(self) -> Locality:
        return self._locality

    @property
    def authority(self) -> Optional[str]:
        """
        Rendered ``[user[:password]@]host[:port]``.

        Returns:
            The authority text, or ``None`` if there is no host.
        """
        if self._host is None:
            return None

        parts = []
        if self._user is not None:
            parts.append(self._user)
            if self._password is not None:
                parts.append(":" + self._password)
            parts.append("@")
        parts.append(self._host)
        if self._port is not None:
            parts.append(f":{self._port}")
        return "".join(parts)

    def is_schemeless(self) -> bool:
        return self._scheme is None

    def is_absolute(self) -> bool:
        """True if there is a host or the URI was explicitly made absolute."""
        return self._host is not None or self._locality is Locality.ABSOLUTE

    def is_relative(self) -> bool:
        return not self.is_absolute()

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def set_scheme(self, value: Any) -> "Uri":
        """
        Set the scheme, promoting the first path segment to host if needed.

        ``value`` may be decorated (``"HTTPS://"``, ``"ftp:"``); anything
        that does not normalize to a valid scheme makes the URI schemeless.

        When a valid scheme is attached to a URI without a host, the path up
        to its first ``/`` (ignoring one leading ``/``) becomes the host::

            example.org/page.html  ->  host "example.org", path "/page.html"

        Args:
            value: New scheme, or ``None`` / ``""`` to remove it.

        Returns:
            This instance.
        """
        try:
            self._scheme = normalize_scheme(value)
        except InvalidSchemeError as exc:
            if value is not None and value != "":
                LOGGER.debug("Dropping scheme: %s", exc)
            self._scheme = None
            return self

        if self._host is None:
            self._promote_host()
        return self

    def _promote_host(self) -> None:
        stripped = self._path[1:] if self._path.startswith("/") else self._path
        host, sep, rest = stripped.partition("/")
        self._host = host
        self._path = "/" + rest if sep else ""
        LOGGER.debug("Promoted %r to host, path is now %r", self._host, self._path)

    def set_user(self, value: Any) -> "Uri":
        self._user = value if isinstance(value, str) else None
        return self

    def set_password(self, value: Any) -> "Uri":
        """Set the password; it is only rendered together with a user."""
        self._password = value if isinstance(value, str) else None
        return self

    set_pass = set_password

    def set_host(self, value: Any) -> "Uri":
        self._host = value if isinstance(value, str) else None
        return self

    def set_port(self, value: Any) -> "Uri":
        """
        Set the port from an ``int``, a whole ``float`` or a digit string.

        Anything else, negatives included, unsets the port.
        """
        try:
            self._port = parse_port(value)
        except InvalidPortError as exc:
            if value is not None:
                LOGGER.debug("Dropping port: %s", exc)
            self._port = None
        return self

    def set_path(self, value: Any) -> "Uri":
        self._path = value if isinstance(value, str) else ""
        return self

    def set_query(self, value: Any) -> "Uri":
        """Set the query string; a single leading ``?`` is dropped."""
        if not isinstance(value, str):
            self._query = None
        elif value.startswith("?"):
            self._query = value[1:]
        else:
            self._query = value
        return self

    def set_fragment(self, value: Any) -> "Uri":
        self._fragment = value if isinstance(value, str) else None
        return self

    def set_absolute(self) -> "Uri":
        self._locality = Locality.ABSOLUTE
        return self

    def set_relative(self) -> "Uri":
        """Make the URI relative, dropping its scheme and host."""
        self._locality = Locality.RELATIVE
        self._scheme = None
        self._host = None
        return self

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def get_uri(self) -> str:
        """
        Render the URI.

        Authority schemes (see
        :data:`~urivo.utils.validators.AUTHORITY_SCHEMES`) are followed by
        ``://``, other schemes by a bare ``:``. Without a scheme, a URI with a
        host or marked absolute starts with ``//``. Empty query and fragment
        are left out along with their ``?`` / ``#``.

        Note:
            A bare trailing separator does not survive a parse/render cycle:
            ``Uri("http://example.com/?").get_uri()`` is
            ``"http://example.com/"``, although ``query`` is ``""``.
        """
        parts = []
        if self._scheme is not None:
            parts.append(self._scheme)
            parts.append("://" if uses_authority(self._scheme) else ":")
        elif self.is_absolute():
            parts.append("//")

        authority = self.authority
        if authority is not None:
            parts.append(authority)

        parts.append(self._path)
        if self._query:
            parts.append("?" + self._query)
        if self._fragment:
            parts.append("#" + self._fragment)
        return "".join(parts)

    def as_dict(self) -> Dict[str, Any]:
        """Return the components as plain data, keyed by attribute name."""
        return {
            "scheme": self._scheme,
            "user": self._user,
            "password": self._password,
            "host": self._host,
            "port": self._port,
            "path": self._path,
            "query": self._query,
            "fragment": self._fragment,
            "locality": self._locality.value,
        }

    def copy(self) -> "Uri":
        """Return an independent instance with the same components."""
        clone = type(self).__new__(type(self))
        for name in self.__slots__:
            setattr(clone, name, getattr(self, name))
        return clone

    __copy__ = copy

    def __str__(self) -> str:
        return self.get_uri()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.get_uri()!r})"

    @staticmethod
    def change_scheme(value: Any, scheme: Any) -> Any:
        """See :func:`change_scheme`."""
        return change_scheme(value, scheme)


def change_scheme(value: Any, scheme: Any) -> Any:
    """
    Replace the scheme of ``value`` in one go.

    Args:
        value: Anything accepted by :class:`Uri`.
        scheme: New scheme, see :meth:`Uri.set_scheme`.

    Returns:
        ``value`` itself, untouched and of its original type, if ``scheme``
        is ``None``; otherwise the rendered URI string.
    """
    if scheme is None:
        return value
    return Uri(value).set_scheme(scheme).get_uri()
