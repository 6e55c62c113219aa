"""A socket wrapper that remembers its local and remote addresses and role."""

from __future__ import annotations

import socket
import sys
from typing import Any

_IP_PKTINFO = getattr(socket, "IP_PKTINFO", 8 if sys.platform.startswith("linux") else None)
_IP_RECVDSTADDR = getattr(socket, "IP_RECVDSTADDR", None)
_IPV6_RECVPKTINFO = getattr(socket, "IPV6_RECVPKTINFO", None)
_IPV6_PKTINFO = getattr(socket, "IPV6_PKTINFO", None)
_IPV6_V6ONLY = getattr(socket, "IPV6_V6ONLY", None)

_EMPTY_ADDRESS = ("0.0.0.0", 0)


def _family_of(address: tuple) -> int:
    if len(address) == 4 or ":" in str(address[0]):
        return socket.AF_INET6
    return socket.AF_INET


class StunSocket:
    """Owns one UDP or TCP socket together with its addresses and role.

    ``local_address`` and ``remote_address`` are refreshed by
    ``update_addresses``; an address that cannot be read keeps its old value.
    """

    def __init__(self) -> None:
        self.sock: socket.socket | None = None
        self._reset()

    def _reset(self) -> None:
        self.sock = None
        self.local_address: tuple = _EMPTY_ADDRESS
        self.remote_address: tuple = _EMPTY_ADDRESS
        self.role: Any = None

    def close(self) -> None:
        """Close the owned socket, if any, and forget every address."""
        if self.sock is not None:
            self.sock.close()
        self._reset()

    def is_valid(self) -> bool:
        """Tell whether a socket is currently held."""
        return self.sock is not None

    def attach(self, sock: socket.socket) -> None:
        """Take ownership of ``sock``, closing any different socket held before."""
        if sock is None:
            raise ValueError("no socket to attach")
        if sock is not self.sock:
            self.close()
            self.sock = sock
        self.update_addresses()

    def detach(self) -> socket.socket | None:
        """Give up ownership of the socket without closing it and return it."""
        sock = self.sock
        self._reset()
        return sock

    def _require_socket(self) -> socket.socket:
        if self.sock is None:
            raise OSError("no socket is attached")
        return self.sock

    def _enable_pktinfo_impl(
        self, level: int, option1: int | None, option2: int | None, enable: bool
    ) -> None:
        sock = self._require_socket()
        if option1 is None and option2 is None:
            raise OSError("packet information is not supported on this platform")
        value = 1 if enable else 0
        error: OSError | None = None
        for option in (option1, option2):
            if option is None:
                continue
            try:
                sock.setsockopt(level, option, value)
                return
            except OSError as exc:
                error = exc
        assert error is not None
        raise error

    def enable_pktinfo_option(self, enable: bool) -> None:
        """Ask the socket to report the destination address of received packets."""
        sock = self._require_socket()
        if sock.family == socket.AF_INET:
            self._enable_pktinfo_impl(socket.IPPROTO_IP, _IP_PKTINFO, _IP_RECVDSTADDR, enable)
        else:
            self._enable_pktinfo_impl(
                socket.IPPROTO_IPV6, _IPV6_RECVPKTINFO, _IPV6_PKTINFO, enable
            )

    def set_non_blocking(self, enable: bool) -> None:
        """Switch the socket between non-blocking and blocking mode."""
        self._require_socket().setblocking(not enable)

    def update_addresses(self) -> None:
        """Re-read the local and peer addresses from the socket."""
        if self.sock is None:
            return
        try:
            self.local_address = self.sock.getsockname()
        except OSError:
            pass
        try:
            self.remote_address = self.sock.getpeername()
        except OSError:
            pass

    def _init_common(self, socktype: int, local: tuple, role: Any, reuse: bool) -> None:
        family = _family_of(local)
        sock = socket.socket(family, socktype, 0)
        try:
            if family == socket.AF_INET6 and _IPV6_V6ONLY is not None:
                # Keep IPv4 clients off IPv6 sockets so they never see mapped addresses.
                try:
                    sock.setsockopt(socket.IPPROTO_IPV6, _IPV6_V6ONLY, 1)
                except OSError:
                    pass
            if reuse:
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind(local)
        except BaseException:
            sock.close()
            raise
        self.attach(sock)
        self.role = role

    def udp_init(self, local: tuple, role: Any = None) -> None:
        """Create a UDP socket bound to ``local``; raises OSError on failure."""
        self._init_common(socket.SOCK_DGRAM, local, role, False)

    def tcp_init(self, local: tuple, role: Any = None, reuse: bool = False) -> None:
        """Create a TCP socket bound to ``local``, optionally with SO_REUSEADDR."""
        self._init_common(socket.SOCK_STREAM, local, role, reuse)

    def __enter__(self) -> StunSocket:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()