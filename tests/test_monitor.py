import logging

from glyphgrid.monitor import PerformanceMonitor


def test_checkpoints_accumulate():
    monitor = PerformanceMonitor()
    monitor.start()
    monitor.checkpoint("first")
    monitor.checkpoint("second")
    first, second = monitor.checkpoints
    assert first.duration == first.time
    assert second.time >= first.time
    assert second.duration == second.time - first.time


def test_report_logged_at_debug(caplog):
    monitor = PerformanceMonitor()
    monitor.start()
    monitor.checkpoint("Planned")
    with caplog.at_level(logging.DEBUG, logger="glyphgrid.monitor"):
        monitor.log_report()
    assert "Conversion took" in caplog.text
    assert "Planned" in caplog.text
