import pytest

from mini_dungeon.engine.messages import MessageLog


def test_keeps_newest_lines_only():
    log = MessageLog(capacity=10)
    for i in range(15):
        log.add(f"line {i}")
    assert len(log) == 10
    assert log.lines()[0] == "line 5"
    assert log.lines()[-1] == "line 14"
    assert log.get_recent(2) == ["line 13", "line 14"]
    assert log.get_recent(0) == []


def test_text_and_clear():
    log = MessageLog(capacity=3)
    log.add("a")
    log.add("b")
    assert log.text() == "a\nb"
    log.clear()
    assert log.lines() == []
    assert log.text() == ""


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        MessageLog(capacity=0)
