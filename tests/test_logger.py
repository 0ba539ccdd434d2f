"""Tests for logger construction."""

import io
import json

import structlog

from rsyncwatch.utils.logger import setup_logging


def test_messages_below_threshold_are_dropped():
    stream = io.StringIO()
    logger = setup_logging("WARN", "json", stream=stream)

    logger.debug("hidden")
    logger.info("hidden too")
    logger.warning("shown", path="/a/x")
    logger.error("also shown")

    records = [json.loads(line) for line in stream.getvalue().splitlines()]
    assert [r["event"] for r in records] == ["shown", "also shown"]
    assert records[0]["path"] == "/a/x"
    assert records[0]["level"] == "warning"
    assert "timestamp" in records[0]


def test_text_format_is_timestamped():
    stream = io.StringIO()
    setup_logging("DEBUG", "text", stream=stream).debug("Event received")

    line = stream.getvalue()
    assert "Event received" in line
    assert "debug" in line
    assert line[:4].isdigit()


def test_loggers_are_independent():
    quiet_stream, loud_stream = io.StringIO(), io.StringIO()
    quiet = setup_logging("ERROR", "json", stream=quiet_stream)
    loud = setup_logging("DEBUG", "json", stream=loud_stream)

    quiet.info("nothing")
    loud.info("something")

    assert quiet_stream.getvalue() == ""
    assert "something" in loud_stream.getvalue()
    # the process-wide structlog configuration is left alone
    assert not structlog.is_configured()


def strict_utf8_stream():
    return io.TextIOWrapper(io.BytesIO(), encoding="utf-8", errors="strict")


def test_undecodable_file_name_is_escaped_in_text_output():
    stream = strict_utf8_stream()
    logger = setup_logging("INFO", "text", stream=stream)

    logger.info("Change synced", path="caf\udce9.txt")
    logger.info("Change synced", path="ok.txt")

    stream.seek(0)
    output = stream.read()
    assert "caf\\xe9.txt" in output
    assert "ok.txt" in output


def test_undecodable_file_name_is_escaped_in_json_output():
    stream = strict_utf8_stream()
    setup_logging("INFO", "json", stream=stream).warning("Source vanished during sync", path="caf\udce9.txt")

    stream.seek(0)
    record = json.loads(stream.read())
    assert record["path"] == "caf\\xe9.txt"


def test_lone_surrogates_do_not_break_output():
    stream = strict_utf8_stream()
    setup_logging("INFO", "text", stream=stream).error("Change sync failed", path="x\ud800y")

    stream.seek(0)
    assert "x\\ud800y" in stream.read()
