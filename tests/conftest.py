"""Shared test fixtures for SmartShop."""

from types import SimpleNamespace

import pytest

from smartshop.classifier import TextClassifier
from smartshop.data_store import DataStore
from smartshop.item_store import ItemStore
from smartshop.models import ShoppingItem
from smartshop.persistence import PersistenceBridge
from smartshop.session import ShoppingSession


class FakeCompletions:
    """Stands in for ``client.chat.completions`` of the async OpenAI client."""

    def __init__(self, content: str | None = None, error: Exception | None = None):
        self.content = content
        self.error = error
        self.calls: list[dict] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def make_fake_client(content: str | None = None, error: Exception | None = None):
    completions = FakeCompletions(content=content, error=error)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep tests away from real config files and API keys."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def temp_data_dir(tmp_path):
    """Create a temporary data directory."""
    data_dir = tmp_path / "test_data"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def data_store(temp_data_dir):
    """Create a DataStore with temporary directory."""
    return DataStore(data_dir=temp_data_dir)


@pytest.fixture
def bridge(data_store):
    """Create a PersistenceBridge over the temporary store."""
    return PersistenceBridge(data_store)


@pytest.fixture
def item_store():
    """Create an empty ItemStore with no persistence."""
    return ItemStore()


@pytest.fixture
def session(bridge):
    """Open a ShoppingSession with an unconfigured classifier."""
    with ShoppingSession(bridge, TextClassifier()) as s:
        yield s


@pytest.fixture
def sample_items():
    """Items inserted as A (to buy), B (bought), C (to buy)."""
    return [
        ShoppingItem(name="Apples", category="Produce"),
        ShoppingItem(name="Bread", category="Bakery", is_bought=True),
        ShoppingItem(name="Carrots", category="Produce"),
    ]


@pytest.fixture
def fake_client():
    """Factory for fake async OpenAI clients."""
    return make_fake_client
