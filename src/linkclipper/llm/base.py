"""Abstract base class for LLM providers."""

from abc import ABC, abstractmethod


class LLMProvider(ABC):
    """Abstract LLM provider interface."""

    @abstractmethod
    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        """Run one chat completion and return the reply text.

        Args:
            system_prompt: System-level instructions for the LLM.
            user_prompt: User-level content/request.

        Raises LLMError when the call fails.
        """
