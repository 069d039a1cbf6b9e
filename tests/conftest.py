"""
Test configuration and fixtures for the redirector.
This centralizes all test setup, making individual tests clean.
"""

import random

import pytest

from redirector_app.models.mapping import DomainHandle
from redirector_app.services.mapping_service import MappingService
from redirector_app.services.short_code_strategies import SpeakableShortCodeStrategy

DOMAIN = "example.me"


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """
    Keep every test away from the real user config directory.
    Environment overrides are cleared and the working directory (where a
    .env file would be read from) is an empty temp directory.
    """
    for name in ("REDIRECTOR_ROOT", "REDIRECTOR_DOMAIN", "REDIRECTOR_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))

    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)


@pytest.fixture
def root(tmp_path):
    """Root directory for databases (not created yet)"""
    return tmp_path / "root"


@pytest.fixture
def handle(root):
    return DomainHandle.create(root, DOMAIN)


@pytest.fixture
def service(handle):
    """
    Mapping service on an uninitialized root.
    Uses a seeded generator so random codes are repeatable.
    """
    strategy = SpeakableShortCodeStrategy(rng=random.Random(1234))
    return MappingService(handle, code_strategy=strategy)


@pytest.fixture
def initialized_service(service):
    """Mapping service whose database and config placeholder exist"""
    assert service.init() is True
    return service
