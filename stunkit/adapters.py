"""Finding local network interfaces and the addresses to bind sockets to."""

from __future__ import annotations

import ipaddress
import socket
from dataclasses import dataclass

import psutil

_IP_FAMILIES = (socket.AF_INET, socket.AF_INET6)


@dataclass(frozen=True)
class Adapter:
    """One IP address assigned to a network interface."""

    name: str
    family: int
    address: str
    is_up: bool = True
    is_loopback: bool = False
    scope_id: int = 0


class AdapterNotFoundError(LookupError):
    """Raised when no interface matches the request."""


def _scope_id(name: str) -> int:
    try:
        return socket.if_nametoindex(name)
    except OSError:
        return 0


def _sockaddr(adapter: Adapter, port: int) -> tuple:
    if adapter.family == socket.AF_INET6:
        return (adapter.address, port, 0, adapter.scope_id)
    return (adapter.address, port)


def list_adapters() -> list[Adapter]:
    """Return every IPv4 and IPv6 address of every local interface."""
    addresses = psutil.net_if_addrs()
    stats = psutil.net_if_stats()
    adapters: list[Adapter] = []
    for name, entries in addresses.items():
        stat = stats.get(name)
        is_up = bool(stat.isup) if stat is not None else False
        flags = set(str(getattr(stat, "flags", "") or "").split(","))
        for entry in entries:
            family = int(entry.family)
            if family not in _IP_FAMILIES or not entry.address:
                continue
            address, _, scope = entry.address.partition("%")
            try:
                ip = ipaddress.ip_address(address)
            except ValueError:
                continue
            adapters.append(
                Adapter(
                    name=name,
                    family=family,
                    address=address,
                    is_up=is_up,
                    is_loopback="loopback" in flags or ip.is_loopback,
                    scope_id=_scope_id(name) if scope else 0,
                )
            )
    return adapters


def default_adapters(
    family: int, adapters: list[Adapter] | None = None
) -> tuple[Adapter | None, Adapter | None]:
    """Return the first two interfaces of ``family`` that are up and not loopback.

    Either element is None when there are not enough such interfaces.
    """
    if adapters is None:
        adapters = list_adapters()
    candidates = (
        adapter
        for adapter in adapters
        if adapter.family == family and adapter.is_up and not adapter.is_loopback
    )
    primary = next(candidates, None)
    alternate = next(candidates, None) if primary is not None else None
    return primary, alternate


def has_at_least_two_adapters(family: int) -> bool:
    """Tell whether two or more usable non-loopback interfaces of ``family`` exist."""
    try:
        primary, alternate = default_adapters(family, list_adapters())
    except OSError:
        return False
    return primary is not None and alternate is not None


def best_address_for_socket_bind(primary: bool, family: int, port: int) -> tuple:
    """Suggest the address for a server's primary or alternate socket.

    The primary socket gets the first usable interface, the alternate the
    second. Raises AdapterNotFoundError when that interface does not exist.
    """
    first, second = default_adapters(family, list_adapters())
    adapter = first if primary else second
    if adapter is None:
        kind = "primary" if primary else "alternate"
        raise AdapterNotFoundError(f"no {kind} adapter for address family {family}")
    return _sockaddr(adapter, port)


def find_adapter_address(
    family: int, name: str, port: int, adapters: list[Adapter]
) -> tuple:
    """Find the address of ``family`` on the interface called ``name``.

    ``name`` may also be a numeric IP address of one of the interfaces.
    Raises ValueError for an empty name and AdapterNotFoundError if nothing matches.
    """
    if not name:
        raise ValueError("adapter name is empty")

    for adapter in adapters:
        if adapter.family == family and adapter.name == name:
            return _sockaddr(adapter, port)

    if family in _IP_FAMILIES:
        try:
            wanted = socket.inet_pton(family, name)
        except (OSError, ValueError):
            wanted = None
        if wanted is not None:
            for adapter in adapters:
                if adapter.family != family:
                    continue
                try:
                    packed = socket.inet_pton(family, adapter.address)
                except (OSError, ValueError):
                    continue
                if packed == wanted:
                    return _sockaddr(adapter, port)

    raise AdapterNotFoundError(f"no adapter or address matches {name!r}")


def socket_address_for_adapter(family: int, name: str, port: int) -> tuple:
    """Find the address of ``family`` on a local interface given by name or IP."""
    return find_adapter_address(family, name, port, list_adapters())