# Test configuration
import sys
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

REPO_ROOT = Path(__file__).parent.parent

# Add repo root to path so tests can import modules
sys.path.insert(0, str(REPO_ROOT))

from clara.upstream.client import ZksClient  # noqa: E402


@pytest.fixture
def mock_client() -> AsyncMock:
    """Upstream client double; every zks coroutine is an AsyncMock."""
    client = AsyncMock(spec=ZksClient)
    client.url = "https://upstream.test"
    return client
