import logging
from enum import Enum
from typing import Callable, Optional

from rich.console import Console

from . import ui
from .executor import CommandExecutor

logger = logging.getLogger(__name__)


class GateOutcome(Enum):
    EXECUTED = "executed"
    DECLINED = "declined"
    DECLINED_THEN_INVALIDATED = "declined_then_invalidated"
    DECLINED_THEN_KEPT = "declined_then_kept"


class ConfirmationGate:
    """
    Shows a candidate command and runs it only if the user answers "y".

    For a command that came from the cache, declining leads to a second
    question: whether the cached entry should be thrown away. The gate only
    reports that decision; the caller owns the cache.
    """

    def __init__(
        self,
        executor: CommandExecutor,
        read_line: Optional[Callable[[], str]] = None,
        console: Console = ui.console,
    ):
        self.executor = executor
        self.console = console
        self._read_line = read_line or console.input

    def present(self, command: str, cached: bool = False) -> GateOutcome:
        if cached:
            ui.display_notice("This command exists in cache", self.console)
        ui.display_command(command, self.console)

        if self._ask("Do you want to execute this command? (y/n)"):
            self._execute(command)
            return GateOutcome.EXECUTED

        if not cached:
            ui.display_notice("Command execution cancelled.", self.console)
            return GateOutcome.DECLINED

        if self._ask("Do you want to invalidate the cache? (y/n)"):
            return GateOutcome.DECLINED_THEN_INVALIDATED

        ui.display_notice("Command execution cancelled.", self.console)
        return GateOutcome.DECLINED_THEN_KEPT

    def _ask(self, question: str) -> bool:
        ui.display_notice(question, self.console)
        try:
            answer = self._read_line()
        except EOFError:
            answer = ""
        return answer.strip().lower() == "y"

    def _execute(self, command: str) -> None:
        return_code, stdout, stderr = self.executor.execute_command(command)
        if return_code is None:
            ui.display_error(f"Failed to execute command: {stderr}", self.console)
            return
        ui.display_output(stdout, stderr, self.console)
