"""
One `ProviderClient` subclass per supported language model backend, and the factory that
picks one from the configuration.
"""

from typing import Dict, Type

from ...config import Config
from ...errors import ConfigError
from ...shell.kinds import ShellKind
from .base import REQUEST_TIMEOUT, ChatCompletionProvider, ProviderClient
from .claude_provider import ClaudeProvider
from .gemini_provider import GeminiProvider
from .openai_provider import OpenAIProvider

PROVIDERS: Dict[str, Type[ProviderClient]] = {
    "openai": OpenAIProvider,
    "gemini": GeminiProvider,
    "claude": ClaudeProvider,
}


def create_provider(config: Config, shell: ShellKind) -> ProviderClient:
    provider_class = PROVIDERS.get(config.llm.provider)
    if provider_class is None:
        raise ConfigError(f"Unsupported LLM provider: {config.llm.provider}")
    return provider_class(config, shell)


__all__ = [
    "REQUEST_TIMEOUT",
    "ChatCompletionProvider",
    "ClaudeProvider",
    "GeminiProvider",
    "OpenAIProvider",
    "ProviderClient",
    "PROVIDERS",
    "create_provider",
]
