"""Tests for the logging wrapper."""

import logging

from c4bitboard.debug import LOGGER_NAME, TRACE_LEVEL, DebugLevel, debug
from c4bitboard.game.bitboard import BoardState


class TestDebugManager:
    def test_level_filtering(self, caplog):
        debug.configure(level=DebugLevel.WARNING)
        with caplog.at_level(TRACE_LEVEL, logger=LOGGER_NAME):
            debug.info("hidden")
            debug.warning("shown")
        assert [r.getMessage() for r in caplog.records] == ["shown"]

    def test_component_prefix_and_filter(self, caplog):
        debug.configure(level=DebugLevel.DEBUG, components=["board"])
        with caplog.at_level(TRACE_LEVEL, logger=LOGGER_NAME):
            debug.debug("kept", "board")
            debug.debug("dropped", "game")
        assert [r.getMessage() for r in caplog.records] == ["[board] kept"]

    def test_disabled(self, caplog):
        debug.configure(level=DebugLevel.DEBUG, enabled=False)
        with caplog.at_level(TRACE_LEVEL, logger=LOGGER_NAME):
            debug.error("nothing")
        assert caplog.records == []

    def test_trace_uses_own_level(self, caplog):
        debug.configure(level=DebugLevel.TRACE)
        with caplog.at_level(TRACE_LEVEL, logger=LOGGER_NAME):
            BoardState.create().drop(0)
        trace_records = [r for r in caplog.records if r.levelno == TRACE_LEVEL]
        assert trace_records
        assert trace_records[0].levelname == "TRACE"
        assert "[board]" in trace_records[0].getMessage()

    def test_quiet_by_default(self, caplog):
        with caplog.at_level(TRACE_LEVEL, logger=LOGGER_NAME):
            BoardState.from_moves([0, 1, 0, 1, 0, 1, 0]).has_win()
        assert caplog.records == []

    def test_timers(self, caplog):
        debug.configure(level=DebugLevel.DEBUG)
        debug.start_timer("work")
        assert debug.end_timer("work") >= 0
        with caplog.at_level(logging.WARNING, logger=LOGGER_NAME):
            assert debug.end_timer("never-started") is None
        assert "not started" in caplog.records[-1].getMessage()

    def test_timer_context(self, caplog):
        debug.configure(level=DebugLevel.DEBUG)
        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            with debug.timer("block", "cli"):
                pass
        assert caplog.records[-1].getMessage().startswith("[cli] Performance [block]")

    def test_set_from_string(self):
        assert debug.set_from_string("debug") is True
        assert debug.level == DebugLevel.DEBUG
        assert debug.set_from_string("loud") is False
        assert debug.level == DebugLevel.DEBUG

    def test_log_file(self, tmp_path):
        path = tmp_path / "engine.log"
        debug.configure(level=DebugLevel.INFO, log_file=str(path))
        debug.info("to file", "game")
        debug.configure(log_file="")
        assert "[game] to file" in path.read_text()
