"""Readiness polling over sets of file descriptors, via poll() or epoll()."""

from __future__ import annotations

import select
from dataclasses import dataclass
from enum import IntEnum, IntFlag


class PollFlag(IntFlag):
    """Portable event flags, independent of the underlying mechanism."""

    NONE = 0
    READ = 0x01
    WRITE = 0x02
    EDGETRIGGER = 0x04
    RDHUP = 0x08
    HUP = 0x10
    PRI = 0x20
    ERROR = 0x40


class PollingType(IntEnum):
    """Which polling mechanism to create."""

    BEST = 0x01
    EPOLL = 0x02
    POLL = 0x04


@dataclass(frozen=True)
class PollEvent:
    """One readiness notification for a descriptor."""

    fd: int
    flags: PollFlag


class PollingError(Exception):
    """Raised when a polling operation cannot be carried out."""


def _translate(flags: int, table: list[tuple[int, int]]) -> int:
    result = 0
    for source, target in table:
        if source and flags & source:
            result |= target
    return result


_POLL_TABLE: list[tuple[int, int]] = [
    (PollFlag.READ, select.POLLIN),
    (PollFlag.WRITE, select.POLLOUT),
    (PollFlag.RDHUP, getattr(select, "POLLRDHUP", 0)),
    (PollFlag.HUP, select.POLLHUP),
    (PollFlag.PRI, select.POLLPRI),
    (PollFlag.ERROR, select.POLLERR),
]

_EPOLL_TABLE: list[tuple[int, int]] = [
    (PollFlag.READ, getattr(select, "EPOLLIN", 0)),
    (PollFlag.WRITE, getattr(select, "EPOLLOUT", 0)),
    (PollFlag.EDGETRIGGER, getattr(select, "EPOLLET", 0)),
    (PollFlag.RDHUP, getattr(select, "EPOLLRDHUP", 0)),
    (PollFlag.HUP, getattr(select, "EPOLLHUP", 0)),
    (PollFlag.PRI, getattr(select, "EPOLLPRI", 0)),
    (PollFlag.ERROR, getattr(select, "EPOLLERR", 0)),
]


def _to_native(flags: int, table: list[tuple[int, int]]) -> int:
    return _translate(int(flags), table)


def _from_native(flags: int, table: list[tuple[int, int]]) -> PollFlag:
    reverse = [(native, portable) for portable, native in table]
    return PollFlag(_translate(flags, reverse))


def _check_capacity(max_sockets: int) -> None:
    if max_sockets <= 0:
        raise ValueError("max_sockets must be positive")


@dataclass
class _Slot:
    fd: int
    events: int
    revents: int = 0


class Poller:
    """A poll()-based poller that hands out events one at a time, round-robin."""

    def __init__(self, max_sockets: int) -> None:
        _check_capacity(max_sockets)
        self.max_sockets = max_sockets
        self._slots: list[_Slot] = []
        self._positions: dict[int, int] = {}
        self._rotation = 0
        self._unread = 0
        self._open = True

    def close(self) -> None:
        """Forget every descriptor; the poller cannot be used afterwards."""
        self._slots.clear()
        self._positions.clear()
        self._unread = 0
        self._open = False

    def _require_open(self) -> None:
        if not self._open:
            raise PollingError("poller is closed")

    def _position(self, fd: int) -> int:
        self._require_open()
        if not self._slots:
            raise PollingError("no descriptors registered")
        pos = self._positions.get(fd)
        if pos is None or pos >= len(self._slots) or self._slots[pos].fd != fd:
            raise PollingError(f"descriptor {fd} is not registered")
        return pos

    def add(self, fd: int, flags: PollFlag) -> None:
        """Start watching ``fd`` for ``flags``."""
        self._require_open()
        if fd in self._positions:
            raise PollingError(f"descriptor {fd} is already registered")
        if len(self._slots) >= self.max_sockets:
            raise PollingError("poller is full")
        self._positions[fd] = len(self._slots)
        self._slots.append(_Slot(fd, _to_native(flags, _POLL_TABLE)))

    def remove(self, fd: int) -> None:
        """Stop watching ``fd``."""
        pos = self._position(fd)
        last = len(self._slots) - 1
        if pos != last:
            moved = self._slots[last]
            self._slots[pos] = moved
            self._positions[moved.fd] = pos
        del self._positions[fd]
        self._slots.pop()

    def change_event_set(self, fd: int, flags: PollFlag) -> None:
        """Replace the events watched on ``fd``."""
        pos = self._position(fd)
        self._slots[pos].events = _to_native(flags, _POLL_TABLE)

    def _find_next_event(self) -> PollEvent | None:
        if self._unread == 0 or not self._slots:
            return None
        size = len(self._slots)
        if self._rotation >= size:
            self._rotation = 0
        for offset in range(size):
            slot = self._slots[(offset + self._rotation) % size]
            if slot.revents:
                event = PollEvent(slot.fd, _from_native(slot.revents, _POLL_TABLE))
                slot.revents = 0
                self._rotation += 1
                self._unread -= 1
                return event
        return None

    def wait_for_next_event(self, timeout_ms: int) -> PollEvent | None:
        """Return the next event, or None on timeout or with nothing registered.

        A negative timeout waits indefinitely.
        """
        self._require_open()
        if not self._slots:
            return None
        event = self._find_next_event()
        if event is not None:
            return event

        self._unread = 0
        native = select.poll()
        for slot in self._slots:
            native.register(slot.fd, slot.events)
        try:
            ready = native.poll(timeout_ms if timeout_ms >= 0 else None)
        except OSError as exc:
            raise PollingError(str(exc)) from exc
        if not ready:
            return None
        for fd, revents in ready:
            pos = self._positions.get(fd)
            if pos is not None and revents:
                self._slots[pos].revents = revents
                self._unread += 1
        return self._find_next_event()

    def __enter__(self) -> Poller:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class EpollPoller:
    """An epoll()-based poller that hands out buffered events one at a time."""

    def __init__(self, max_sockets: int) -> None:
        _check_capacity(max_sockets)
        if not hasattr(select, "epoll"):
            raise PollingError("epoll is not available on this platform")
        self.max_sockets = max_sockets
        try:
            self._epoll: select.epoll | None = select.epoll(max_sockets)
        except OSError as exc:
            raise PollingError(str(exc)) from exc
        self._pending: list[tuple[int, int]] = []
        self._current = 0

    def close(self) -> None:
        """Release the epoll descriptor."""
        if self._epoll is not None:
            self._epoll.close()
            self._epoll = None
        self._pending = []
        self._current = 0

    def _require_open(self) -> select.epoll:
        if self._epoll is None:
            raise PollingError("poller is closed")
        return self._epoll

    @staticmethod
    def _check_fd(fd: int) -> None:
        if fd == -1:
            raise ValueError("invalid descriptor")

    def add(self, fd: int, flags: PollFlag) -> None:
        """Start watching ``fd`` for ``flags``."""
        self._check_fd(fd)
        epoll = self._require_open()
        try:
            epoll.register(fd, _to_native(flags, _EPOLL_TABLE))
        except OSError as exc:
            raise PollingError(str(exc)) from exc

    def remove(self, fd: int) -> None:
        """Stop watching ``fd``."""
        self._check_fd(fd)
        epoll = self._require_open()
        try:
            epoll.unregister(fd)
        except OSError as exc:
            raise PollingError(str(exc)) from exc

    def change_event_set(self, fd: int, flags: PollFlag) -> None:
        """Replace the events watched on ``fd``."""
        self._check_fd(fd)
        epoll = self._require_open()
        try:
            epoll.modify(fd, _to_native(flags, _EPOLL_TABLE))
        except OSError as exc:
            raise PollingError(str(exc)) from exc

    def wait_for_next_event(self, timeout_ms: int) -> PollEvent | None:
        """Return the next event, or None on timeout.

        A negative timeout waits indefinitely.
        """
        epoll = self._require_open()
        if self._current >= len(self._pending):
            self._pending = []
            self._current = 0
            timeout = timeout_ms / 1000 if timeout_ms >= 0 else -1
            try:
                self._pending = epoll.poll(timeout, self.max_sockets)
            except OSError as exc:
                raise PollingError(str(exc)) from exc
            if not self._pending:
                return None
        fd, events = self._pending[self._current]
        self._current += 1
        return PollEvent(fd, _from_native(events, _EPOLL_TABLE))

    def __enter__(self) -> EpollPoller:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def create_polling_instance(kind: PollingType | int, max_sockets: int) -> Poller | EpollPoller:
    """Create a poller of the requested kind; BEST prefers epoll when present."""
    try:
        kind = PollingType(kind)
    except ValueError:
        raise PollingError(f"unknown polling type: {kind!r}") from None
    if kind is PollingType.BEST:
        kind = PollingType.EPOLL if hasattr(select, "epoll") else PollingType.POLL
    if kind is PollingType.EPOLL:
        return EpollPoller(max_sockets)
    return Poller(max_sockets)