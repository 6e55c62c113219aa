import socket

import pytest

from stunkit.recvfromex import recvfromex
from stunkit.stunsocket import StunSocket


def test_new_socket_is_invalid():
    s = StunSocket()
    assert s.is_valid() is False
    assert s.local_address == ("0.0.0.0", 0)
    assert s.remote_address == ("0.0.0.0", 0)


def test_udp_init_binds_and_records_local_address():
    with StunSocket() as s:
        s.udp_init(("127.0.0.1", 0), "primary")
        assert s.is_valid()
        assert s.local_address[0] == "127.0.0.1"
        assert s.local_address[1] > 0
        assert s.local_address == s.sock.getsockname()
        assert s.role == "primary"
        assert s.sock.type == socket.SOCK_DGRAM


def test_udp_socket_has_no_remote_address():
    with StunSocket() as s:
        s.udp_init(("127.0.0.1", 0))
        assert s.remote_address == ("0.0.0.0", 0)


def test_close_resets_state():
    s = StunSocket()
    s.udp_init(("127.0.0.1", 0), "primary")
    raw = s.sock
    s.close()
    assert s.is_valid() is False
    assert s.role is None
    assert s.local_address == ("0.0.0.0", 0)
    assert raw.fileno() == -1


def test_context_manager_closes():
    with StunSocket() as s:
        s.udp_init(("127.0.0.1", 0))
        raw = s.sock
    assert s.is_valid() is False
    assert raw.fileno() == -1


def test_detach_returns_open_socket():
    s = StunSocket()
    s.udp_init(("127.0.0.1", 0))
    address = s.local_address
    raw = s.detach()
    try:
        assert s.is_valid() is False
        assert raw.fileno() != -1
        assert raw.getsockname() == address
    finally:
        raw.close()


def test_attach_none_raises():
    with pytest.raises(ValueError):
        StunSocket().attach(None)


def test_attach_closes_previous_socket():
    s = StunSocket()
    s.udp_init(("127.0.0.1", 0))
    old = s.sock
    new = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    new.bind(("127.0.0.1", 0))
    s.attach(new)
    try:
        assert old.fileno() == -1
        assert s.sock is new
        assert s.local_address == new.getsockname()
    finally:
        s.close()


def test_attach_same_socket_keeps_it_open():
    with StunSocket() as s:
        s.udp_init(("127.0.0.1", 0))
        raw = s.sock
        s.attach(raw)
        assert s.sock is raw
        assert raw.fileno() != -1


def test_tcp_connect_updates_remote_address():
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(("127.0.0.1", 0))
    server.listen(1)
    try:
        with StunSocket() as s:
            s.tcp_init(("127.0.0.1", 0), None, True)
            assert s.sock.type == socket.SOCK_STREAM
            assert s.sock.getsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR) != 0
            s.sock.connect(server.getsockname())
            s.update_addresses()
            assert s.remote_address == server.getsockname()
            conn, peer = server.accept()
            conn.close()
            assert peer == s.local_address
    finally:
        server.close()


def test_bind_conflict_raises_and_stays_invalid():
    with StunSocket() as first:
        first.udp_init(("127.0.0.1", 0))
        second = StunSocket()
        with pytest.raises(OSError):
            second.udp_init(first.local_address)
        assert second.is_valid() is False


def test_set_non_blocking_toggles_mode():
    with StunSocket() as s:
        s.udp_init(("127.0.0.1", 0))
        s.set_non_blocking(True)
        assert s.sock.getblocking() is False
        s.set_non_blocking(False)
        assert s.sock.getblocking() is True


def test_set_non_blocking_without_socket_raises():
    with pytest.raises(OSError):
        StunSocket().set_non_blocking(True)


def test_enable_pktinfo_without_socket_raises():
    with pytest.raises(OSError):
        StunSocket().enable_pktinfo_option(True)


def test_pktinfo_reports_destination():
    with StunSocket() as s:
        s.udp_init(("127.0.0.1", 0))
        s.enable_pktinfo_option(True)
        sender = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sender.sendto(b"ping", s.local_address)
            s.sock.settimeout(2.0)
            datagram = recvfromex(s.sock)
        finally:
            sender.close()
        assert datagram.data == b"ping"
        assert datagram.destination == s.local_address
        assert datagram.source[0] == "127.0.0.1"


def test_update_addresses_without_socket_keeps_defaults():
    s = StunSocket()
    s.update_addresses()
    assert s.local_address == ("0.0.0.0", 0)
    assert s.remote_address == ("0.0.0.0", 0)