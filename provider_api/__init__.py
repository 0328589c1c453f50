"""
provider_api package: adapters for the hosted knowledge base platform.

The gateway services speak to a small, carefully designed contract
(`KnowledgeBaseClient`) while vendor-specific details stay behind that
boundary.

Included modules:
- base: The abstract interface and the `FileMetadata` value.
- openai_client: The production implementation over the OpenAI SDK.
- mock_client: A deterministic in-memory implementation for demos and tests.
- factory: Selects the implementation from configuration.
"""

from .base import FileMetadata, KnowledgeBaseClient
from .factory import get_client
from .mock_client import InMemoryKnowledgeBaseClient

__all__ = [
    "FileMetadata",
    "KnowledgeBaseClient",
    "InMemoryKnowledgeBaseClient",
    "get_client",
]
