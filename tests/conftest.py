from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure the repository's src/ directory is importable without installation.
REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = REPO_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from prismic_fakes import API_ENDPOINT, FakePrismicSession  # noqa: E402


@pytest.fixture
def make_client():
    """Build a PrismicClient backed by an in-memory document list."""
    from spacetraveling.core.http_client import HTTPClient
    from spacetraveling.core.prismic_client import PrismicClient

    def factory(documents):
        session = FakePrismicSession(documents)
        client = PrismicClient(API_ENDPOINT, http=HTTPClient(session=session))
        return client, session

    return factory


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point the runtime data directory at a temporary location."""
    target = tmp_path / "data"
    monkeypatch.setenv("SPACETRAVELING_DATA_DIR", str(target))
    return target
