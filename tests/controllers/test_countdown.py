import logging

import pytest

from hscan.controllers import countdown as countdown_module
from hscan.errors import InvalidWaitError


class SleepRecorder:
    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.mark.parametrize("value", ["-1", "abc", "", "1.5", "²", -3, True])
def test_invalid_values_fail_without_sleeping(value):
    sleep = SleepRecorder()

    with pytest.raises(InvalidWaitError):
        countdown_module.countdown(value, sleep=sleep)

    assert sleep.calls == []


def test_invalid_wait_is_also_a_value_error():
    with pytest.raises(ValueError):
        countdown_module.parse_wait_seconds("abc")


@pytest.mark.parametrize("value, expected", [("0", 0), ("12", 12), (" 7 ", 7), (3, 3)])
def test_parse_wait_seconds(value, expected):
    assert countdown_module.parse_wait_seconds(value) == expected


def test_zero_returns_immediately():
    sleep = SleepRecorder()

    countdown_module.countdown("0", sleep=sleep)

    assert sleep.calls == []


def test_sleeps_once_per_second():
    sleep = SleepRecorder()

    countdown_module.countdown(3, sleep=sleep)

    assert sleep.calls == [1, 1, 1]


def test_announcements_every_five_then_every_second(caplog):
    sleep = SleepRecorder()

    with caplog.at_level(logging.INFO, logger="hscan"):
        countdown_module.countdown(12, sleep=sleep)

    announced = [r.args[0] for r in caplog.records if r.getMessage().startswith("Scanning in")]
    assert announced == [10, 5, 4, 3, 2, 1]
    assert len(sleep.calls) == 12


def test_default_sleep_is_time_sleep(monkeypatch):
    sleep = SleepRecorder()
    monkeypatch.setattr(countdown_module.time, "sleep", sleep)

    countdown_module.countdown(2)

    assert sleep.calls == [1, 1]
