"""Telemetry 测试"""

from splitdeck.telemetry import Metrics, format_session_log, get_logger


class TestMetrics:
    """Metrics facade 测试"""

    def test_counter_with_labels(self):
        m = Metrics()
        m.inc("layout.noop", {"op": "split"})
        m.inc("layout.noop", {"op": "split"})
        m.inc("layout.noop", {"op": "close"})

        assert m.get_counter("layout.noop", {"op": "split"}) == 2
        assert m.get_counter("layout.noop", {"op": "close"}) == 1
        assert m.get_counter("layout.noop") == 0

    def test_label_order_irrelevant(self):
        m = Metrics()
        m.inc("persist.error", {"op": "load", "reason": "json"})
        assert m.get_counter("persist.error", {"reason": "json", "op": "load"}) == 1

    def test_gauge_and_reset(self):
        m = Metrics()
        m.gauge("workspace.groups", 3)
        assert m.get_gauge("workspace.groups") == 3

        m.reset()
        assert m.get_gauge("workspace.groups") == 0.0
        assert m.get_all_counters() == {}


class TestLogging:
    """日志工具测试"""

    def test_get_logger_uses_name(self):
        assert get_logger("splitdeck.layout").name == "splitdeck.layout"

    def test_format_session_log(self):
        assert format_session_log("Layout", "s-1718000000000-7k2x9", "split") == "[Layout:7k2x9] split"
        assert format_session_log("Layout", "3EB79F67-40C3", "close") == "[Layout:3EB79F67] close"
        assert format_session_log("Layout", None, "fill") == "[Layout:vacant] fill"
