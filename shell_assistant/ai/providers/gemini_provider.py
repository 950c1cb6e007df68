from typing import Dict, List

from ..llm import LLMClient
from .openai_provider import OpenAIProvider

# Gemini accepts OpenAI chat completion requests on this endpoint, which lets the
# openai SDK (and its timeout handling) do the transport.
GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


class GeminiProvider(OpenAIProvider):
    name = "gemini"

    def provider_config(self) -> Dict:
        provider_config = super().provider_config()
        provider_config["base_url"] = GEMINI_BASE_URL
        return provider_config

    def build_messages(self, system_prompt: str, user_prompt: str) -> List[Dict]:
        # Gemini gets a single user turn: instructions first, then the request.
        return [
            LLMClient.format_user_message(f"{system_prompt}\n\nUser request: {user_prompt}")
        ]
