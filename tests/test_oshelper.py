import os

from stunkit import oshelper
from stunkit.oshelper import DEFAULT_CONSOLE_WIDTH, get_console_width, get_millisecond_counter


def test_console_width_from_terminal(monkeypatch):
    monkeypatch.setattr(oshelper.os, "get_terminal_size", lambda fd: os.terminal_size((132, 40)))
    assert get_console_width() == 132


def test_console_width_zero_columns_falls_back(monkeypatch):
    monkeypatch.setattr(oshelper.os, "get_terminal_size", lambda fd: os.terminal_size((0, 0)))
    assert get_console_width() == DEFAULT_CONSOLE_WIDTH


def test_console_width_without_terminal(monkeypatch):
    def no_terminal(fd):
        raise OSError("not a tty")

    monkeypatch.setattr(oshelper.os, "get_terminal_size", no_terminal)
    assert get_console_width() == 80


def test_millisecond_counter_is_32_bit():
    value = get_millisecond_counter()
    assert 0 <= value <= 0xFFFFFFFF


def test_millisecond_counter_wraps(monkeypatch):
    monkeypatch.setattr(oshelper.time, "time_ns", lambda: (2**32 + 7) * 1_000_000 + 999_999)
    assert get_millisecond_counter() == 7


def test_millisecond_counter_tracks_clock(monkeypatch):
    ms = 123_456
    monkeypatch.setattr(oshelper.time, "time_ns", lambda: ms * 1_000_000)
    assert get_millisecond_counter() == ms