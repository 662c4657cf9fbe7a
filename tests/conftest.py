import os

import pytest

from utitool.lsregister import RECORD_DELIMITER
from utitool.process import ProcessResult

DATA_DIR = os.path.join(os.path.dirname(__file__), "data")


def make_dump(*blocks):
    """Join record blocks the way lsregister separates them."""
    return "".join(block + RECORD_DELIMITER + "\n" for block in blocks)


class FakeRunner:
    """Stands in for run_process, answering by executable name."""

    def __init__(self, responses=None):
        self.responses = responses or {}
        self.calls = []

    def __call__(self, path, args=()):
        self.calls.append((path, list(args)))
        response = self.responses.get(os.path.basename(path))
        if callable(response):
            response = response(list(args))
        if response is None:
            return ProcessResult(1, "", f"{path}: not found")
        return response


@pytest.fixture
def sample_dump():
    with open(os.path.join(DATA_DIR, "lsregister_sample.txt"), encoding="utf-8") as f:
        return f.read()


@pytest.fixture
def fake_runner(sample_dump):
    return FakeRunner({"lsregister": ProcessResult(0, sample_dump, "")})


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("UTITOOL_LSREGISTER", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
