"""
The interactive review loop.

Each candidate command is shown on an editable, pre-filled prompt line:

- Enter runs it as-is, or as edited.
- Clearing the line and pressing Enter skips it.
- Ctrl-D or Ctrl-C ends the session without running anything else.

Commands run one at a time in their own subprocess. The session keeps track of the
working directory across them. When a command fails, the user is offered help and the
session stops.
"""

import logging
import os
import readline

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from ..errors import SessionError
from .executor import CommandExecutor
from .remediation import RemediationService

logger = logging.getLogger(__name__)


class SessionOutcome(str, Enum):
    COMPLETED = "completed"  # Every candidate was run or skipped.
    ABORTED = "aborted"  # The user stopped the session.
    FAILED = "failed"  # A command failed and the session stopped there.


@dataclass
class SessionResult:
    outcome: SessionOutcome
    working_directory: str
    executed_commands: List[str] = field(default_factory=list)


def split_candidates(text: str) -> List[str]:
    """Turns the raw model response into the commands to review, in order."""
    return [line.strip() for line in text.split("\n") if line.strip()]


def read_prefilled_line(prompt: str, text: str) -> str:
    """Reads a line of input with `text` already typed in and editable."""
    readline.set_startup_hook(lambda: readline.insert_text(text))
    try:
        return input(prompt)
    finally:
        readline.set_startup_hook()


class InteractiveSession:
    """Walks the user through a list of candidate commands."""

    def __init__(
        self,
        commands: Sequence[str],
        executor: CommandExecutor,
        remediation: Optional[RemediationService] = None,
        working_directory: Optional[str] = None,
    ):
        self.commands = tuple(commands)
        self.executor = executor
        self.remediation = remediation
        self.working_directory = working_directory or os.getcwd()

    def run(self) -> SessionResult:
        executed: List[str] = []

        for candidate in self.commands:
            try:
                command = read_prefilled_line(f"{self.working_directory} $ ", candidate)
            except (KeyboardInterrupt, EOFError):
                print()
                logger.info("Session aborted by the user")
                return self._result(SessionOutcome.ABORTED, executed)
            except OSError as e:
                raise SessionError(f"Error reading line: {e}") from e

            command = command.strip()
            if not command:
                logger.debug("Skipped candidate: %s", candidate)
                continue

            outcome = self.executor.execute(command, self.working_directory)
            executed.append(command)

            if not outcome.success:
                logger.error("Error executing command: %s", outcome.error)
                if self.remediation is not None:
                    self.remediation.offer(outcome.error)
                return self._result(SessionOutcome.FAILED, executed)

            self.working_directory = outcome.working_directory

        logger.info("Session completed")
        return self._result(SessionOutcome.COMPLETED, executed)

    def _result(self, outcome: SessionOutcome, executed: List[str]) -> SessionResult:
        return SessionResult(
            outcome=outcome,
            working_directory=self.working_directory,
            executed_commands=executed,
        )
