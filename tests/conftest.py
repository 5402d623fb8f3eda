import json

import pytest

from mhflauncher.api import LauncherAPI
from mhflauncher.controller import LauncherController
from mhflauncher.launch import ExternalRuntime


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        if text is None:
            text = json.dumps(body) if body is not None else ""
        self.text = text

    def json(self):
        return json.loads(self.text)


class FakeHTTP:
    """Stands in for requests.Session: replays queued responses and records calls."""

    def __init__(self):
        self.queue = []
        self.calls = []

    def reply(self, status_code=200, body=None, text=None):
        self.queue.append(FakeResponse(status_code, body, text))

    def fail(self, exc):
        self.queue.append(exc)

    def post(self, url, json=None, **kwargs):
        self.calls.append((url, json))
        item = self.queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class RecordingRuntime(ExternalRuntime):
    def __init__(self, exc=None):
        self.configs = []
        self.exc = exc

    def run(self, config):
        self.configs.append(config)
        if self.exc is not None:
            raise self.exc


def session_payload(**overrides):
    data = {
        "currentTs": 100,
        "expiryTs": 200,
        "entranceCount": 3,
        "notifications": ["hi"],
        "user": {"rights": 1, "token": "T"},
        "characters": [
            {"id": 1, "name": "X", "isFemale": False, "weapon": 0, "hr": 1, "gr": 0, "lastLogin": 0},
        ],
        "mezFes": None,
    }
    data.update(overrides)
    return data


def character_payload(char_id, name="New", **overrides):
    data = {
        "id": char_id,
        "name": name,
        "isNew": True,
        "isFemale": True,
        "weapon": 2,
        "hr": 0,
        "gr": 0,
        "lastLogin": 0,
    }
    data.update(overrides)
    return data


@pytest.fixture
def http():
    return FakeHTTP()


@pytest.fixture
def api(http):
    client = LauncherAPI()
    client.session = http
    return client


@pytest.fixture
def runtime():
    return RecordingRuntime()


@pytest.fixture
def controller(api, runtime):
    return LauncherController(api=api, runtime=runtime, mhf_folder="C:/MHF")
