"""Status code definitions."""

from enum import IntEnum

_LABELS = {
    0: "OK",
    1: "Warning",
    2: "Critical",
    3: "Unknown",
}


class StatusCode(IntEnum):
    """Severity of a check outcome, doubling as the plugin's process exit code.

    Integers outside the four known states are still accepted:
    ``StatusCode(100)`` yields a pseudo-member labelled ``ExitCode(100)``
    whose exit code is 100. ``str()`` and plain f-strings give the label;
    an explicit format spec such as ``{:d}`` formats the integer.
    """

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3

    @classmethod
    def _missing_(cls, value):
        if not isinstance(value, int) or isinstance(value, bool):
            return None
        value = int(value)
        member = int.__new__(cls, value)
        member._name_ = f"ExitCode({value})"
        member._value_ = value
        return member

    @property
    def label(self) -> str:
        """The display name used in the report line."""
        return _LABELS.get(self._value_, f"ExitCode({self._value_})")

    @property
    def exit_code(self) -> int:
        """The process exit status for this state."""
        return self._value_

    def __str__(self) -> str:
        return self.label

    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return self.label
        return format(self._value_, format_spec)
