"""Output sinks used to deliver a rendered report."""

import sys
from abc import ABC, abstractmethod
from typing import List, Optional, TextIO


class ResultSink(ABC):
    """Base class for anything that can publish a report line and end the run."""

    @abstractmethod
    def write(self, line: str) -> None:
        """Write one report line, newline-terminated, and make it visible.

        Args:
            line: The rendered report without a trailing newline.
        """
        pass

    @abstractmethod
    def exit(self, code: int) -> None:
        """Terminate with the given exit status.

        Args:
            code: The process exit status.
        """
        pass


class ProcessSink(ResultSink):
    """Writes to standard output and exits the interpreter."""

    def __init__(self, stream: Optional[TextIO] = None):
        """Initialize the sink.

        Args:
            stream: The text stream to write to. If None, ``sys.stdout`` is
                looked up on every write.
        """
        self.stream = stream

    def write(self, line: str) -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        print(line, file=stream, flush=True)

    def exit(self, code: int) -> None:
        sys.exit(code)


class RecordingSink(ResultSink):
    """Keeps written lines and exit codes in memory instead of exiting."""

    def __init__(self):
        self.lines: List[str] = []
        self.exit_codes: List[int] = []

    def write(self, line: str) -> None:
        self.lines.append(line)

    def exit(self, code: int) -> None:
        self.exit_codes.append(code)

    @property
    def output(self) -> str:
        """Everything written so far, as it would appear on stdout."""
        return "".join(f"{line}\n" for line in self.lines)

    @property
    def exit_code(self) -> Optional[int]:
        """The first exit code requested, or None if exit was never called."""
        return self.exit_codes[0] if self.exit_codes else None
