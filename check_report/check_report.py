"""Check report: the result a monitoring plugin builds up and emits.

A plugin creates a ``CheckReport``, records its outcome with
``set_result``, attaches performance metrics, and finally calls ``emit``
which prints one Nagios-compatible line and exits with the status code::

    report = CheckReport()
    report.set_result(StatusCode.OK, "Everything is fine")
    report.add_metric("response_time", PerformanceMetric(value=1.23, unit="ms"))
    report.emit()
"""

import string
from typing import Dict, List, Optional, Union

from loguru import logger
from tabulate import tabulate

from check_report.models.performance_metric import PerformanceMetric
from check_report.models.status_code import StatusCode
from check_report.result_sink import ProcessSink, ResultSink

DEFAULT_TEMPLATE = "{status} - {message}"


class _KeepUnknownFields(dict):
    """Format fields mapping that leaves unknown fields in place."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


class CheckReport:
    """Outcome of a monitoring check, rendered in plugin output format."""

    def __init__(
        self,
        status: Union[StatusCode, int] = StatusCode.OK,
        message: str = "",
        template: str = DEFAULT_TEMPLATE,
        sink: Optional[ResultSink] = None,
    ) -> None:
        """Initialize a check report.

        Args:
            status: The initial status.
            message: The initial message.
            template: The message line template. ``{status}`` is replaced
                with the status label and ``{message}`` with the message.
                Positional slots (``"{} - {}"``) take the same two values in
                that order.
            sink: Where ``emit`` writes and exits. If None, a ``ProcessSink``
                is used, which prints to stdout and exits the interpreter.
        """
        self.status = status
        self.message = message
        self.template = template
        self.sink = sink
        self._metrics: Dict[str, PerformanceMetric] = {}

    @property
    def status(self) -> StatusCode:
        """The check status."""
        return self._status

    @status.setter
    def status(self, value: Union[StatusCode, int]) -> None:
        self._status = StatusCode(value)

    def __len__(self) -> int:
        return len(self._metrics)

    def __contains__(self, name: object) -> bool:
        return name in self._metrics

    def __repr__(self) -> str:
        return (
            f"CheckReport(status={self.status.label!r}, message={self.message!r}, "
            f"metrics={self.metric_names!r})"
        )

    # Result
    # =====================================================================
    def set_result(self, status: Union[StatusCode, int], message: str) -> None:
        """Set the status and message of the report.

        Args:
            status: The check status. Plain integers are accepted, including
                ones outside the four known states.
            message: The message to display. May be empty.
        """
        self.status = status
        self.message = message

    # Metrics
    # =====================================================================
    @property
    def metric_names(self) -> List[str]:
        """Metric names in output order."""
        return list(self._metrics)

    @property
    def metrics(self) -> Dict[str, PerformanceMetric]:
        """A copy of the metrics in output order."""
        return dict(self._metrics)

    def get_metric(self, name: str) -> Optional[PerformanceMetric]:
        """Get a metric by name.

        Args:
            name: The metric name.

        Returns:
            PerformanceMetric: The stored metric, or None if absent.
        """
        return self._metrics.get(name)

    def add_metric(self, name: str, metric: PerformanceMetric) -> None:
        """Add a performance metric.

        A new name is appended to the output order. An existing name has its
        metric replaced and keeps its position.

        Args:
            name: The metric name.
            metric: The metric to store.
        """
        if name in self._metrics:
            logger.debug(f"[METRIC] Replacing metric '{name}'")
        else:
            logger.debug(f"[METRIC] Adding metric '{name}'")
        self._metrics[name] = metric

    def update_metric(self, name: str, metric: PerformanceMetric) -> None:
        """Replace the metric stored under a name.

        A name that was never added is inserted at the end rather than
        rejected.

        Args:
            name: The metric name.
            metric: The new metric.
        """
        if name not in self._metrics:
            logger.debug(f"[METRIC] Update of unknown metric '{name}', inserting")
        self._metrics[name] = metric

    def delete_metric(self, name: str) -> None:
        """Remove a metric, keeping the order of the remaining ones.

        Args:
            name: The metric name. Unknown names are ignored.
        """
        if name in self._metrics:
            del self._metrics[name]
            logger.debug(f"[METRIC] Deleted metric '{name}'")

    # Rendering
    # =====================================================================
    def _render_message(self) -> str:
        fields = _KeepUnknownFields(status=self.status.label, message=self.message)
        try:
            return string.Formatter().vformat(
                self.template, (self.status.label, self.message), fields
            )
        except (AttributeError, IndexError, KeyError, ValueError) as e:
            logger.warning(
                f"[RENDER] Template {self.template!r} could not be applied, using it verbatim: {e}"
            )
            return self.template

    def render(self) -> str:
        """Format the report line without printing or exiting.

        Returns:
            str: ``<status> - <message>`` followed, when metrics exist, by
            `` | `` and one space-terminated perfdata token per metric.
        """
        output = self._render_message()

        if self._metrics:
            perfdata = "".join(
                f"{metric.to_perfdata(name)} " for name, metric in self._metrics.items()
            )
            output = f"{output} | {perfdata}"

        return output

    def describe(self) -> str:
        """Format the metrics as a human-readable table.

        Returns:
            str: A table with one row per metric, in output order.
        """
        headers = ["Metric", "Value", "Unit", "Warn", "Crit", "Min", "Max"]
        table_data = [
            [
                name,
                f"{metric.value:.2f}",
                metric.unit or "N/A",
                f"{metric.warn:.2f}",
                f"{metric.crit:.2f}",
                f"{metric.min:.2f}",
                f"{metric.max:.2f}",
            ]
            for name, metric in self._metrics.items()
        ]
        return tabulate(
            table_data,
            headers=headers,
            tablefmt="pretty",
            colalign=("left", "right", "left", "right", "right", "right", "right"),
            disable_numparse=True,
        )

    def emit(self, sink: Optional[ResultSink] = None) -> None:
        """Print the report line and exit with the status code.

        With the default ``ProcessSink`` this does not return.

        Args:
            sink: Overrides the sink given at construction for this call.
        """
        if sink is None:
            sink = self.sink if self.sink is not None else ProcessSink()
        output = self.render()
        exit_code = self.status.exit_code

        logger.debug(
            f"[EMIT] status={self.status.label} exit_code={exit_code} metrics={len(self._metrics)}"
        )
        if self._metrics:
            logger.opt(lazy=True).debug("[EMIT] Performance data:\n{}", self.describe)

        try:
            sink.write(output)
        except OSError as e:
            logger.error(f"[EMIT] Failed to write check result: {e}")
            raise

        sink.exit(exit_code)


def new_check_report(**kwargs) -> CheckReport:
    """Create a check report with default values.

    Args:
        **kwargs: Passed through to ``CheckReport``.

    Returns:
        CheckReport: A report with status OK, an empty message and no metrics.
    """
    return CheckReport(**kwargs)
