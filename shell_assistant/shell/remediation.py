import logging

from typing import TYPE_CHECKING, Optional

from rich.console import Console
from rich.markdown import Markdown

from ..errors import ExecutionError, HistoryError, ProviderError
from .history import DEFAULT_HISTORY_LINES, HistoryReader

if TYPE_CHECKING:
    from ..ai.providers import ProviderClient

logger = logging.getLogger(__name__)

NO_HISTORY_AVAILABLE = "no history available"


class RemediationService:
    """
    Offers LLM help after a failed command. It bundles the provider and the history
    reader so the session only needs one collaborator for its failure path.
    """

    def __init__(
        self,
        provider: "ProviderClient",
        history: HistoryReader,
        console: Optional[Console] = None,
        history_lines: int = DEFAULT_HISTORY_LINES,
    ):
        self.provider = provider
        self.history = history
        self.console = console or Console()
        self.history_lines = history_lines

    def offer(self, error: ExecutionError) -> bool:
        """Asks the user whether they want help and runs the request if so."""
        if not self._get_user_confirmation("Would you like help with this error?"):
            logger.info("Remediation declined")
            return False

        self.remediate(error)
        return True

    def remediate(self, error: ExecutionError) -> Optional[str]:
        history_text = self._read_history()

        with self.console.status("Asking for help..."):
            try:
                advice = self.provider.handle_error(str(error), history_text)
            except ProviderError as e:
                logger.error("Error getting help from the LLM: %s", e)
                return None

        self.console.print(Markdown(advice))
        return advice

    def _read_history(self) -> str:
        try:
            return self.history.get_history(self.history_lines)
        except HistoryError as e:
            logger.warning("%s", e)
            return NO_HISTORY_AVAILABLE

    def _get_user_confirmation(self, message: str) -> bool:
        try:
            confirm = input(f"{message} [y/N] ")
            return confirm.strip().lower() in ("y", "yes")
        except (KeyboardInterrupt, EOFError):
            return False
