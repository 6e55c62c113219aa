"""Turning host names and numeric IP strings into socket addresses.

Addresses are returned in the form the ``socket`` module uses:
``(host, port)`` for IPv4 and ``(host, port, flowinfo, scope_id)`` for IPv6.
"""

from __future__ import annotations

import socket

from stunkit.stringhelper import trim


class ResolveError(Exception):
    """Raised when a name or address cannot be turned into a socket address."""


def resolve_host_name(
    host: str,
    family: int = socket.AF_INET,
    numeric_only: bool = False,
) -> tuple:
    """Resolve ``host`` (a name or numeric address) to its first socket address.

    Surrounding whitespace is ignored. With ``numeric_only`` no DNS lookup is
    made and only numeric addresses are accepted. The port of the result is 0.
    Raises ValueError for an empty name and ResolveError when resolution fails.
    """
    name = trim(host)
    if not name:
        raise ValueError("host name is empty")

    flags = socket.AI_NUMERICHOST if numeric_only else 0
    try:
        results = socket.getaddrinfo(name, None, family, socket.SOCK_STREAM, 0, flags)
    except (OSError, UnicodeError) as exc:
        raise ResolveError(f"unable to resolve {name!r}: {exc}") from exc
    if not results:
        raise ResolveError(f"no addresses found for {name!r}")
    return results[0][4]


def numeric_ip_to_address(family: int, ip: str) -> tuple:
    """Convert a numeric IPv4 or IPv6 string into a socket address with port 0.

    Raises ValueError for a family other than AF_INET or AF_INET6 and
    ResolveError when ``ip`` is not a valid address of that family.
    """
    if family not in (socket.AF_INET, socket.AF_INET6):
        raise ValueError(f"unsupported address family: {family!r}")
    try:
        packed = socket.inet_pton(family, ip)
    except (OSError, ValueError) as exc:
        raise ResolveError(f"{ip!r} is not a numeric address") from exc
    text = socket.inet_ntop(family, packed)
    if family == socket.AF_INET:
        return (text, 0)
    return (text, 0, 0, 0)