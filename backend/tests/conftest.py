from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from devprobe.core.config import settings
from devprobe.main import app


@pytest.fixture(scope="module")
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="module")
def token_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {settings.API_TOKEN}"}
