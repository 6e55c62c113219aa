import pytest

from stunkit.logger import LogLevel, get_log_level, log_msg, set_log_level


@pytest.fixture(autouse=True)
def restore_level():
    saved = get_log_level()
    set_log_level(LogLevel.ALWAYS)
    yield
    set_log_level(saved)


@pytest.mark.parametrize("level", [0, 1, 2, 3, 7])
def test_set_and_get_round_trip(level):
    set_log_level(level)
    assert get_log_level() == level


def test_always_message_is_printed(capsys):
    message = "Binding test: success"
    log_msg(LogLevel.ALWAYS, message)
    assert capsys.readouterr().out == message + "\n"


def test_formatting_arguments(capsys):
    log_msg(LogLevel.ALWAYS, "%s-%d", "port", 3478)
    assert capsys.readouterr().out == "port-3478\n"


def test_debug_suppressed_at_always_level(capsys):
    log_msg(LogLevel.DEBUG, "hidden %d", 1)
    assert capsys.readouterr().out == ""


def test_debug_shown_at_debug_level(capsys):
    set_log_level(LogLevel.DEBUG)
    message = "Connected to server"
    log_msg(LogLevel.DEBUG, message)
    assert capsys.readouterr().out == message + "\n"


def test_higher_levels_hidden_below_threshold(capsys):
    set_log_level(LogLevel.VERBOSE)
    log_msg(LogLevel.VERBOSE_EXTREME, "details")
    log_msg(LogLevel.VERBOSE, "packet")
    assert capsys.readouterr().out == "packet\n"


def test_percent_without_args_is_literal(capsys):
    message = "100% done"
    log_msg(LogLevel.ALWAYS, message)
    assert capsys.readouterr().out == message + "\n"