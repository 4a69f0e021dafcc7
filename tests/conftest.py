import pytest

import app as app_module
from tests.payloads import make_client_factory, by_platform


@pytest.fixture
def ok_factory():
    return make_client_factory(by_platform)


@pytest.fixture
def client():
    app_module.app.config['TESTING'] = True
    with app_module.app.test_client() as c:
        yield c


@pytest.fixture
def use_factory(monkeypatch):
    """Point the web app's downloader at a stubbed client factory."""
    def _use(factory):
        monkeypatch.setattr(app_module.downloader, 'client_factory', factory)
        return factory
    return _use
