import io
import subprocess
import sys
import textwrap
from pathlib import Path

import pytest

from check_report import CheckReport, ProcessSink, RecordingSink, ResultSink, StatusCode, configure_logging

PROJECT_ROOT = Path(__file__).resolve().parents[1]


class BrokenSink(ResultSink):
    def __init__(self):
        self.exit_codes = []

    def write(self, line):
        raise BrokenPipeError("stdout closed")

    def exit(self, code):
        self.exit_codes.append(code)


def test_emit_writes_rendered_line_and_exits(sink, response_time):
    report = CheckReport(sink=sink)
    report.set_result(StatusCode.WARNING, "Slow response")
    report.add_metric("response_time", response_time)

    report.emit()

    assert sink.lines == [report.render()]
    assert sink.output == report.render() + "\n"
    assert sink.exit_code == 1


def test_emit_sink_argument_overrides_constructor_sink(sink):
    default_sink = RecordingSink()
    report = CheckReport(sink=default_sink)
    report.emit(sink)
    assert sink.exit_code == 0
    assert default_sink.lines == []


def test_emit_unknown_status_exits_with_raw_value(sink):
    report = CheckReport()
    report.set_result(100, "odd")
    report.emit(sink)
    assert sink.lines == ["ExitCode(100) - odd"]
    assert sink.exit_code == 100


def test_emit_write_failure_is_raised_before_exit(log_messages):
    broken = BrokenSink()
    report = CheckReport(sink=broken)
    with pytest.raises(BrokenPipeError):
        report.emit()
    assert broken.exit_codes == []
    assert any("Failed to write check result" in message for message in log_messages)


def test_emit_logs_performance_table(sink, response_time, log_messages):
    report = CheckReport()
    report.add_metric("response_time", response_time)
    report.emit(sink)
    assert any("[EMIT] status=OK exit_code=0 metrics=1" in message for message in log_messages)
    assert any("response_time" in message and "Metric" in message for message in log_messages)


def test_process_sink_prints_to_stdout_and_exits(capsys):
    report = CheckReport()
    report.set_result(StatusCode.CRITICAL, "Disk full")
    with pytest.raises(SystemExit) as excinfo:
        report.emit(ProcessSink())
    assert excinfo.value.code == 2
    assert capsys.readouterr().out == "Critical - Disk full\n"


def test_process_sink_custom_stream():
    stream = io.StringIO()
    ProcessSink(stream).write("OK - fine")
    assert stream.getvalue() == "OK - fine\n"


def test_configure_logging_writes_to_stderr_only(capsys):
    try:
        configure_logging(debug=True)
        CheckReport(sink=RecordingSink()).emit()
        captured = capsys.readouterr()
        assert "[EMIT]" in captured.err
        assert captured.out == ""
    finally:
        from loguru import logger

        logger.remove()
        logger.disable("check_report")


@pytest.mark.parametrize(
    "status, message, expected_code",
    [(0, "Test Message", 0), (2, "Disk full", 2), (3, "no data", 3)],
)
def test_emit_terminates_real_process(status, message, expected_code):
    script = textwrap.dedent(
        f"""
        from check_report import CheckReport, PerformanceMetric
        report = CheckReport()
        report.set_result({status}, {message!r})
        report.add_metric("load", PerformanceMetric(value=0.5, warn=1, crit=2, min=0, max=4))
        report.emit()
        raise AssertionError("emit returned")
        """
    )
    completed = subprocess.run(
        [sys.executable, "-c", script],
        cwd=PROJECT_ROOT,
        capture_output=True,
        text=True,
    )
    assert completed.returncode == expected_code
    assert completed.stdout.endswith(" | 'load'=0.50;1.00;2.00;0.00;4.00 \n")
    assert completed.stdout.count("\n") == 1
    assert completed.stderr == ""


def test_emit_skips_metric_table_when_logging_disabled(sink, response_time, monkeypatch):
    report = CheckReport()
    report.add_metric("response_time", response_time)

    def fail():
        raise AssertionError("table built while logging is disabled")

    monkeypatch.setattr(report, "describe", fail)
    report.emit(sink)
    assert sink.lines == [report.render()]
    assert sink.exit_code == 0
