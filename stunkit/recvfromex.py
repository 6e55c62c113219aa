"""Receiving datagrams together with the local address they were sent to."""

from __future__ import annotations

import socket
import sys
from dataclasses import dataclass

_ANCILLARY_SIZE = 1000
_DEFAULT_BUFSIZE = 1500

_IP_PKTINFO = getattr(socket, "IP_PKTINFO", 8 if sys.platform.startswith("linux") else None)
_IP_RECVDSTADDR = getattr(socket, "IP_RECVDSTADDR", None)
_IPV6_PKTINFO = getattr(socket, "IPV6_PKTINFO", None)


@dataclass(frozen=True)
class Datagram:
    """A received datagram with its sender and the local address it arrived on.

    ``destination`` is the unspecified address with port 0 when the socket
    does not report packet information.
    """

    data: bytes
    source: tuple
    destination: tuple


def _empty_address(family: int) -> tuple:
    if family == socket.AF_INET6:
        return ("::", 0, 0, 0)
    return ("0.0.0.0", 0)


def _parse_destination(family: int, ancdata: list, port: int) -> tuple:
    for level, kind, data in ancdata:
        if level == socket.IPPROTO_IPV6 and kind == _IPV6_PKTINFO and len(data) >= 16:
            return (socket.inet_ntop(socket.AF_INET6, data[:16]), port, 0, 0)
        if level != socket.IPPROTO_IP:
            continue
        if _IP_PKTINFO is not None and kind == _IP_PKTINFO and len(data) >= 12:
            # in_pktinfo: interface index, local address, header destination
            return (socket.inet_ntop(socket.AF_INET, data[8:12]), port)
        if _IP_RECVDSTADDR is not None and kind == _IP_RECVDSTADDR and len(data) >= 4:
            return (socket.inet_ntop(socket.AF_INET, data[:4]), port)
    return _empty_address(family)


def _local_port(sock: socket.socket) -> int:
    try:
        return sock.getsockname()[1]
    except OSError:
        return 0


def recvfromex(
    sock: socket.socket, bufsize: int = _DEFAULT_BUFSIZE, flags: int = 0
) -> Datagram:
    """Receive one datagram of at most ``bufsize`` bytes from ``sock``.

    The destination address is taken from the packet-information control
    messages, which the socket must have been asked to deliver. Errors from
    the receive call, such as BlockingIOError, propagate.
    """
    data, ancdata, _msg_flags, source = sock.recvmsg(bufsize, _ANCILLARY_SIZE, flags)
    destination = _parse_destination(sock.family, ancdata, _local_port(sock))
    return Datagram(data=data, source=source, destination=destination)