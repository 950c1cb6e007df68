from typing import Optional

from rich.console import Console
from rich.markdown import Markdown

from ...config import Config
from ...shell.kinds import ShellKind
from ..providers import ProviderClient, create_provider


def explain(
    config: Config,
    shell: ShellKind,
    prompt: str,
    provider: Optional[ProviderClient] = None,
) -> str:
    """Answers `prompt` with a concise explanation, rendered as Markdown."""
    provider = provider or create_provider(config, shell)

    console = Console()
    with console.status("Thinking..."):
        description = provider.get_response(prompt)

    console.print(Markdown(description))
    return description
