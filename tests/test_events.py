"""
Tests for event emission.
"""

import logging

from scaffolder.core.events import EventEmitter


class TestEventEmitter:
    def test_listeners_called_in_order(self):
        calls = []
        emitter = EventEmitter()
        emitter.on("x", lambda v: calls.append(("a", v))).on("x", lambda v: calls.append(("b", v)))
        assert emitter.emit("x", 1) is True
        assert calls == [("a", 1), ("b", 1)]

    def test_emit_without_listener(self):
        assert EventEmitter().emit("x") is False

    def test_once(self):
        calls = []
        emitter = EventEmitter()
        emitter.once("x", calls.append)
        emitter.emit("x", 1)
        emitter.emit("x", 2)
        assert calls == [1]
        assert emitter.listener_count("x") == 0

    def test_off(self):
        calls = []
        emitter = EventEmitter()
        emitter.on("x", calls.append)
        emitter.off("x", calls.append)
        emitter.emit("x", 1)
        assert calls == []

    def test_unhandled_error_is_logged_not_raised(self, caplog):
        with caplog.at_level(logging.ERROR, logger="scaffolder.core.events"):
            assert EventEmitter().emit("error", ValueError("bad")) is False
        assert "bad" in caplog.text
