from datetime import datetime, timedelta, timezone

import pytest

from config import ConfigurationManager
from cardbook.contacts import ContactCollectionManager
from cardbook.input_handler import ImagePayload
from cardbook.ocr_engine import RecognitionBackend, RecognitionSession
from cardbook.storage import InMemoryContactStore


class ScriptedSession(RecognitionSession):
    """Session that replays scripted ticks and texts per image."""

    def __init__(self, backend):
        self.backend = backend

    def recognize(self, image, on_progress):
        self.backend.recognize_calls.append(image.name)
        step = self.backend.script[len(self.backend.recognize_calls) - 1]
        for fraction in step.get("ticks", [1.0]):
            on_progress(fraction)
        if "error" in step:
            raise step["error"]
        return step["text"]

    def close(self):
        self.backend.close_calls += 1
        if self.backend.close_error is not None:
            raise self.backend.close_error


class ScriptedBackend(RecognitionBackend):
    name = "scripted"

    def __init__(self, script, open_error=None, close_error=None):
        self.script = script
        self.open_error = open_error
        self.close_error = close_error
        self.open_calls = 0
        self.close_calls = 0
        self.recognize_calls = []

    def open(self, language):
        self.open_calls += 1
        if self.open_error is not None:
            raise self.open_error
        return ScriptedSession(self)


class StepClock:
    """Returns a fixed start time, then advances one second per call."""

    def __init__(self, start=None):
        self.now = start or datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self):
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture(autouse=True)
def fresh_config():
    ConfigurationManager.reset()
    yield
    ConfigurationManager.reset()


@pytest.fixture
def memory_store():
    return InMemoryContactStore(key="testContacts", quota_bytes=0)


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def manager(memory_store, clock):
    return ContactCollectionManager(memory_store, clock=clock)


@pytest.fixture
def make_payloads():
    def _make(*names):
        return [ImagePayload.from_bytes(name, b"") for name in names]
    return _make


@pytest.fixture
def scripted_backend():
    def _make(*steps, **kwargs):
        return ScriptedBackend(list(steps), **kwargs)
    return _make
