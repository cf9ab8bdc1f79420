import sys
from pathlib import Path

import pytest


# Ensure the `api/` directory is on sys.path so tests can import `app.*`
CURRENT_FILE = Path(__file__).resolve()
API_DIR = CURRENT_FILE.parents[1]  # .../api
if str(API_DIR) not in sys.path:
    sys.path.insert(0, str(API_DIR))


class FakeModel:
    """TextModel stand-in: returns a canned answer or raises a canned error."""

    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.calls = []

    def generate(self, model, prompt):
        self.calls.append((model, prompt))
        if self.error is not None:
            raise self.error
        return self.text


class FakeStore:
    def __init__(self, error=None):
        self.error = error
        self.documents = []

    def add(self, collection, document):
        if self.error is not None:
            raise self.error
        self.documents.append((collection, document))


def run_now(fn, *args):
    fn(*args)


@pytest.fixture
def fake_store():
    return FakeStore()
