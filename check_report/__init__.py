"""Nagios-compatible check results for monitoring plugins."""

from loguru import logger

from check_report.check_report import DEFAULT_TEMPLATE, CheckReport, new_check_report
from check_report.logging_config import PACKAGE_NAME, configure_logging
from check_report.models.performance_metric import PerformanceMetric
from check_report.models.status_code import StatusCode
from check_report.result_sink import ProcessSink, RecordingSink, ResultSink

logger.disable(PACKAGE_NAME)

__all__ = [
    "DEFAULT_TEMPLATE",
    "CheckReport",
    "PerformanceMetric",
    "ProcessSink",
    "RecordingSink",
    "ResultSink",
    "StatusCode",
    "configure_logging",
    "new_check_report",
]
