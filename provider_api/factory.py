"""
Provider factory for the knowledge base client (OpenAI/mock switch).

`get_client(settings)` inspects `settings.kb_provider` and builds the matching
implementation. Supported values are "openai" (default) and "mock". Unknown
values raise a `ValueError` so misconfiguration fails at startup rather than
on the first request.
"""

from __future__ import annotations

import logging

from config import Settings
from provider_api.base import KnowledgeBaseClient

logger = logging.getLogger(__name__)


def get_client(settings: Settings) -> KnowledgeBaseClient:
    """
    Build the knowledge base client selected by configuration.

    Args:
        settings (Settings): Process configuration.

    Returns:
        KnowledgeBaseClient: A client bound to the configured Collection and Assistant.

    Raises:
        ValueError: If the provider value is unsupported.
    """
    provider = settings.kb_provider.strip().lower()
    logger.info("Provider selection (knowledge base): %s", provider)

    if provider == "openai":
        from provider_api.openai_client import OpenAIKnowledgeBaseClient  # local import to avoid SDK setup in mock mode

        return OpenAIKnowledgeBaseClient(settings)
    if provider == "mock":
        from provider_api.mock_client import InMemoryKnowledgeBaseClient

        return InMemoryKnowledgeBaseClient()

    raise ValueError(f"Unsupported knowledge base provider: {provider}")
