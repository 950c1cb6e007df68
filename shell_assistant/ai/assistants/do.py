import logging
import os

from typing import Optional

from rich.console import Console

from ...config import Config
from ...shell.executor import CommandExecutor
from ...shell.history import HistoryReader
from ...shell.kinds import ShellKind
from ...shell.remediation import RemediationService
from ...shell.session import (
    InteractiveSession,
    SessionOutcome,
    SessionResult,
    split_candidates,
)
from ..providers import ProviderClient, create_provider

logger = logging.getLogger(__name__)


def do(
    config: Config,
    shell: ShellKind,
    prompt: str,
    provider: Optional[ProviderClient] = None,
    working_directory: Optional[str] = None,
) -> SessionResult:
    """
    Asks the model for the commands that accomplish `prompt` and lets the user review
    and run them one by one.
    """
    provider = provider or create_provider(config, shell)
    console = Console()

    with console.status("Thinking..."):
        response = provider.get_command(prompt)

    candidates = split_candidates(response)
    logger.debug("Model proposed %d command(s)", len(candidates))
    if not candidates:
        console.print("[yellow]The model did not suggest any command.[/]")
        return SessionResult(SessionOutcome.COMPLETED, working_directory or os.getcwd())

    remediation = RemediationService(provider, HistoryReader(shell), console)
    session = InteractiveSession(
        candidates,
        CommandExecutor(shell),
        remediation,
        working_directory=working_directory,
    )
    return session.run()
