"""
conftest.py - shared pytest configuration and fixtures for the gateway tests.

Pytest imports this module before collecting any test file, which lets us:
1) Put the project root on `sys.path` so flat imports like `from services ...`
   resolve without an editable install.
2) Provide fixtures that build an immutable `Settings`, an in-memory knowledge
   base client, and a FastAPI `TestClient` wired to both. No test talks to the
   real platform.
"""

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from config import load_settings  # noqa: E402
from main import create_app  # noqa: E402
from provider_api.mock_client import InMemoryKnowledgeBaseClient  # noqa: E402

TEST_ENV = {
    "OPENAI_API_KEY": "sk-test",
    "OPENAI_ASSISTANT_ID": "asst_test",
    "OPENAI_VECTOR_STORE_ID": "vs_test",
}


@pytest.fixture
def settings():
    return load_settings(dict(TEST_ENV))


@pytest.fixture
def kb_client():
    return InMemoryKnowledgeBaseClient()


@pytest.fixture
def client(settings, kb_client):
    return TestClient(create_app(settings, kb_client))


@pytest.fixture
def env():
    """A fresh copy of the required environment values."""
    return dict(TEST_ENV)
