import pytest

from splitstats.config import get_settings
from splitstats.core.store import InMemoryCounterStore
from splitstats.services.experiments.catalog import InMemoryExperimentCatalog


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store():
    return InMemoryCounterStore()


@pytest.fixture
def catalog(store):
    return InMemoryExperimentCatalog(store)


@pytest.fixture
def experiment(catalog):
    """Two-arm experiment with no named goals."""
    return catalog.register("link_color", ["blue", "red"])


@pytest.fixture
def goal_experiment(catalog):
    """Two-arm experiment tracking two named goals."""
    return catalog.register("checkout", ["control", "one_page"], goals=["signup", "purchase"])
