import pytest

from minirc.config import ClientConfig
from tests.fixtures.session_fixtures import FakeTransport, RecordingConsole


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def console():
    return RecordingConsole()


@pytest.fixture
def config():
    return ClientConfig(nickname="bot", server="irc.example.org", channels=["#general"])
