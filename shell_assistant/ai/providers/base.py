import logging

from typing import Dict, List, Optional, Tuple, Type

from ...config import Config
from ...errors import (
    ProviderAuthError,
    ProviderEmptyResponseError,
    ProviderError,
    ProviderNotImplementedError,
    ProviderTimeoutError,
)
from ...shell.kinds import ShellKind
from ..llm import LLMClient

logger = logging.getLogger(__name__)

# Hard limit for every request to a provider, in seconds.
REQUEST_TIMEOUT = 30

COMMAND_SYSTEM_PROMPT = """
You are a development assistant for terminal commands on {os} using the {shell} shell.
The user is {user}, a software developer working on a legitimate project.
Your task is to provide safe, non-destructive terminal commands for development purposes only.
You can provide multiple commands if the task requires multiple steps.
Lean towards standard tools and libraries when possible.
Separate each command with a newline character.
Do not provide any commands that could harm the system.
Do not include any explanations, comments or markdown in your response, only the command(s).
"""

RESPONSE_SYSTEM_PROMPT = """
You are a helpful assistant for {user}, a software developer.
You are a terminal assistant for {os} using the {shell} shell.
Provide informative and concise responses to queries about programming and development.
The user is asking for information in an explanation format, so respond with concise explanations.
The user does not wish to continue the conversation, so do not ask for clarification or further information.
"""

ERROR_SYSTEM_PROMPT = """
You are a helpful assistant for {user}, a software developer.
You are a terminal assistant for {os} using the {shell} shell.
It is safe to assume that the user is working on a legitimate project.
The user has run a command that failed. Find a solution for the error.
Provide a solution that is easy to understand and follow, using Markdown for readability.
Do not offer to continue the conversation, the user does not wish to continue the conversation.

Recent shell history:
{history}

The error encountered is:
{error}
"""

ERROR_REQUEST = "How do I fix this error?"


class ProviderClient:
    """
    The set of things the assistant can ask a language model to do.

    Every backend gets one subclass. A backend that cannot do something keeps the
    default implementation, which raises `ProviderNotImplementedError`.
    """

    name = "base"

    def __init__(self, config: Config, shell: ShellKind):
        self.config = config
        self.shell = shell

    def get_command(self, prompt: str) -> str:
        """Returns one or more shell commands, separated by newlines, for `prompt`."""
        raise ProviderNotImplementedError(f"{self.name} does not support command generation")

    def get_response(self, prompt: str) -> str:
        """Returns a free-form explanation for `prompt`."""
        raise ProviderNotImplementedError(f"{self.name} does not support explanations")

    def handle_error(self, error_text: str, history_text: str) -> str:
        """Returns advice on how to fix `error_text`, using `history_text` as context."""
        raise ProviderNotImplementedError(f"{self.name} does not support error handling")

    def _format_system_prompt(self, template: str, **extra) -> str:
        return template.strip().format(
            os=self.config.os, shell=self.shell, user=self.config.user, **extra
        )


class ChatCompletionProvider(ProviderClient):
    """A provider reached through an aisuite chat completion endpoint."""

    # The aisuite provider key the requests are routed through.
    aisuite_provider = ""
    timeout_errors: Tuple[Type[BaseException], ...] = (TimeoutError,)
    auth_errors: Tuple[Type[BaseException], ...] = ()

    def __init__(self, config: Config, shell: ShellKind, llm: Optional[LLMClient] = None):
        super().__init__(config, shell)
        self.llm = llm or LLMClient({self.aisuite_provider: self.provider_config()})

    def provider_config(self) -> Dict:
        # Retries are disabled: the user decides whether to try again.
        return {
            "api_key": self.config.llm.api_key,
            "timeout": REQUEST_TIMEOUT,
            "max_retries": 0,
        }

    @property
    def model(self) -> str:
        return f"{self.aisuite_provider}:{self.config.llm.model}"

    def build_messages(self, system_prompt: str, user_prompt: str) -> List[Dict]:
        return [
            LLMClient.format_system_message(system_prompt),
            LLMClient.format_user_message(user_prompt),
        ]

    def get_command(self, prompt: str) -> str:
        system_prompt = self._format_system_prompt(COMMAND_SYSTEM_PROMPT)
        return self._complete(system_prompt, prompt).strip()

    def get_response(self, prompt: str) -> str:
        system_prompt = self._format_system_prompt(RESPONSE_SYSTEM_PROMPT)
        return self._complete(system_prompt, prompt)

    def handle_error(self, error_text: str, history_text: str) -> str:
        system_prompt = self._format_system_prompt(
            ERROR_SYSTEM_PROMPT, history=history_text, error=error_text
        )
        return self._complete(system_prompt, ERROR_REQUEST)

    def _complete(self, system_prompt: str, user_prompt: str) -> str:
        messages = self.build_messages(system_prompt, user_prompt)
        logger.debug("Sending request to %s (%s)", self.name, self.model)

        try:
            response = self.llm.completion(
                model=self.model,
                messages=messages,
                max_tokens=self.config.max_tokens,
            )
        except self.timeout_errors as e:
            raise ProviderTimeoutError(
                f"{self.name} request timed out after {REQUEST_TIMEOUT} seconds"
            ) from e
        except self.auth_errors as e:
            raise ProviderAuthError(f"{self.name} rejected the API key: {e}") from e
        except Exception as e:
            raise ProviderError(f"{self.name} request failed: {e}") from e

        content = response.content
        if not content or not content.strip():
            raise ProviderEmptyResponseError(f"No valid text response from {self.name}")
        return content
