"""Tests for dropping stale change notifications."""

import os

from rsyncwatch.core.events import ChangeEvent, EventType
from rsyncwatch.core.filter import EventFilter


def test_existing_file_is_accepted(tmp_path, logger):
    path = tmp_path / "x.txt"
    path.write_text("hello")

    assert EventFilter(logger=logger).accept(ChangeEvent(path=str(path)))


def test_existing_directory_is_accepted(tmp_path, logger):
    path = tmp_path / "dir"
    path.mkdir()

    event = ChangeEvent(path=str(path), event_type=EventType.CREATED, is_directory=True)
    assert EventFilter(logger=logger).accept(event)


def test_missing_path_is_rejected(tmp_path, logger, log_stream):
    event = ChangeEvent(path=str(tmp_path / "ghost.txt"), event_type=EventType.DELETED)

    assert not EventFilter(logger=logger).accept(event)
    assert "ghost.txt" in log_stream.getvalue()


def test_repeated_checks_are_stable(tmp_path, logger):
    present = tmp_path / "present.txt"
    present.write_text("data")
    event_filter = EventFilter(logger=logger)

    present_event = ChangeEvent(path=str(present))
    missing_event = ChangeEvent(path=str(tmp_path / "missing.txt"))

    assert [event_filter.accept(present_event) for _ in range(5)] == [True] * 5
    assert [event_filter.accept(missing_event) for _ in range(5)] == [False] * 5


def test_decision_follows_file_system(tmp_path, logger):
    path = tmp_path / "churn.swp"
    path.write_text("tmp")
    event = ChangeEvent(path=str(path))
    event_filter = EventFilter(logger=logger)

    assert event_filter.accept(event)
    path.unlink()
    assert not event_filter.accept(event)


def test_broken_symlink_is_accepted(tmp_path, logger):
    link = tmp_path / "link"
    os.symlink(tmp_path / "nowhere", link)

    assert EventFilter(logger=logger).accept(ChangeEvent(path=str(link)))
