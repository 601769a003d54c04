# tests/conftest.py
import os
import random
import pytest
from fastapi.testclient import TestClient

# 1) Skip the simulated training delay before any imports read the settings
os.environ["TRAINING_DELAY_SECONDS"] = "0"

from app.main import app    # safe: no I/O at import
client = TestClient(app)

@pytest.fixture(scope="session")
def test_client():
    return client

@pytest.fixture
def rng():
    return random.Random(1234)
