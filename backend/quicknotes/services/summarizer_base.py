"""
QuickNotes Backend — Abstract Summarizer Interface
===================================================

What:  Abstract base class defining the contract for note summarization providers.
Why:   The route only needs "text in, summary out"; keeping the provider
       behind an interface lets tests and future providers swap in without
       touching the route.
How:   Concrete implementations inherit from Summarizer and implement summarize().
"""

from abc import ABC, abstractmethod


class Summarizer(ABC):
    """
    Abstract interface for AI-generated note summaries.

    Contract:
        - summarize() accepts free text and returns a trimmed summary string
        - Exactly one provider call per summarize(); no retries
        - Provider-specific errors are wrapped in SummarizationError
        - A missing credential is reported as ConfigurationError before any
          network traffic

    Implementations:
        - GeminiSummarizer: Google Gemini generateContent (default)
    """

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """True when the provider has the credentials it needs."""
        ...

    @abstractmethod
    async def summarize(self, text: str) -> str:
        """
        Produce a one-to-two sentence summary of `text`.

        Raises:
            ConfigurationError: Provider credentials are missing.
            SummarizationError: The provider call failed or returned an
                unexpected response shape.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the provider is reachable and operational.

        Returns: True if reachable, False otherwise. Never raises.
        """
        ...
