"""Runs the editor's script through the first loaded plugin on a worker thread."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional

from itools.editor import Editor
from itools.plugins import PluginManager

log = logging.getLogger(__name__)

STATUS_TIMEOUT = 10000
FAILURE_MESSAGE = "Error failed to execute task."

_PARAGRAPH_SEPARATOR = "\u2029"

StatusCallback = Callable[[str, int], None]
ResultCallback = Callable[[int, str, str], None]


@dataclass(frozen=True)
class RunResult:
    """Exit code, standard output and error text of one script run."""

    exit_code: int
    output: str
    error: str


def interpret_result(value: Any) -> RunResult:
    """Turn a plugin's result value into a run result.

    A text mentioning "exception" (in any case) counts as an error; anything
    that is not text means the task failed.
    """
    if not isinstance(value, str):
        return RunResult(1, "", FAILURE_MESSAGE)
    if value and "exception" in value.lower():
        return RunResult(1, "", value)
    return RunResult(0, value, "")


class CodeRunner:
    """Executes the selected code, or the whole script, in the background."""

    def __init__(
        self,
        editor: Optional[Editor],
        plugin_manager: Optional[PluginManager],
        on_status: Optional[StatusCallback] = None,
        on_result: Optional[ResultCallback] = None,
    ) -> None:
        self.editor = editor
        self.plugin_manager = plugin_manager
        self.on_status = on_status
        self.on_result = on_result
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    def _status(self, message: str, timeout: int = STATUS_TIMEOUT) -> None:
        if self.on_status is not None:
            self.on_status(message, timeout)

    def _task(self) -> Any:
        if self.editor is None:
            return None
        script = self.editor.selected_text() or self.editor.to_plain_text()
        if not script:
            return None
        cleaned = script.replace(_PARAGRAPH_SEPARATOR, "\n")
        if self.plugin_manager is None:
            return None
        return self.plugin_manager.call_perform_action(cleaned).result_value

    def _work(self) -> None:
        self._status("Executing..")
        try:
            value = self._task()
        except Exception:
            log.exception("Script execution failed")
            value = None
        result = interpret_result(value)
        if self.on_result is not None:
            self.on_result(result.exit_code, result.output, result.error)
        self._status("Completed")

    def run_code(self) -> bool:
        """Start a run; returns False when one is already in progress."""
        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                return False
            self._thread = threading.Thread(
                target=self._work, name="CodeRunnerThread", daemon=True
            )
            self._thread.start()
        return True

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Wait for the current run; returns True when no run is left in progress."""
        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def is_running(self) -> bool:
        """Whether a run is in progress."""
        thread = self._thread
        return thread is not None and thread.is_alive()