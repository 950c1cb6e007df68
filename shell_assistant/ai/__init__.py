"""
The `ai` package provides the language model side of the assistant: the transport, the
provider backends, and the two assistants built on top of them.
"""

from .assistants.do import do
from .assistants.explain import explain
from .providers import ProviderClient, create_provider


__all__ = [
    "ProviderClient",
    "create_provider",
    "do",
    "explain",
]
