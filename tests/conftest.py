"""Pytest fixtures for transmission-relay tests."""

import json

import pytest
from fastapi.testclient import TestClient

from transmission_relay.config import Settings
from transmission_relay.storage import FileDocumentStore
from transmission_relay.web import create_app


@pytest.fixture
def sample_issue():
    """Sample issue document covering every module type."""
    return {
        "cycleNumber": 7,
        "transmissionDate": "CYCLE 7 :: 2026-10-19",
        "layoutConfiguration": {
            "templateName": "focus-center",
            "featuredVisualTargetId": "art-2",
            "moduleOrder": ["cip-4", "dir-1"],
        },
        "mainContent": [
            {
                "id": "dir-1",
                "type": "directive",
                "title": "// PRIMARY DIRECTIVE //",
                "content": "<p>Hold the line.</p>",
            },
            {
                "id": "art-2",
                "type": "article",
                "title": "Signal Archaeology",
                "content": "<p>Notes from the archive.</p>",
            },
            {
                "id": "let-3",
                "type": "letter",
                "sender": "Operator Nine",
                "content": "<p>Received and understood.</p>",
            },
            {
                "id": "cip-4",
                "type": "cipher",
                "content": "GUR FVTANY VF PYRNE",
                "decryptionHint": "ROT13",
            },
        ],
        "footerMantra": "// END TRANSMISSION //",
        "styleOverrides": {"--accent-color": "#ff00aa"},
    }


@pytest.fixture
def sample_issue_bytes(sample_issue):
    """Sample issue document serialized as an upload payload."""
    return json.dumps(sample_issue).encode("utf-8")


@pytest.fixture
def data_file(tmp_path):
    """Path of the persisted issue document inside a temporary data dir."""
    return tmp_path / "data" / "current_magazine_data.json"


@pytest.fixture
def store(data_file):
    """File store bootstrapped with the placeholder issue."""
    store = FileDocumentStore(data_file)
    store.ensure_initialized()
    return store


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a temporary data directory."""
    return Settings(DATA_DIR=str(tmp_path / "data"))


@pytest.fixture
def client(settings):
    """Test client for an app with a bootstrapped file store."""
    return TestClient(create_app(settings))
