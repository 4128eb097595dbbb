"""
================================================================================
Unit Test Configuration
================================================================================

Fixtures for the unit suites: fake clock, fake driver, a site and an
active session. Global registries are reset around every test.

================================================================================
"""

from __future__ import annotations

from typing import Generator

import pytest

from pagebind.configuration import ConfigLoader, project, reset_configuration
from pagebind.decorators import DecoratorManager
from pagebind.resolution import ResolutionEngine
from pagebind.session import Session, session_context
from pagebind.site import Site
from testsuites.support.fakes import FakeClock, FakeDriver


@pytest.fixture(autouse=True)
def _isolated_registries(monkeypatch, tmp_path) -> Generator[None, None, None]:
    """No settings file, no registered configuration, empty per-thread state."""
    monkeypatch.setenv("PAGEBIND_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.setattr(project, "_entry_points", lambda group: ())
    ConfigLoader.reset()
    reset_configuration()
    session_context.clear()
    DecoratorManager.clear_decorators()

    yield

    session_context.clear()
    DecoratorManager.clear_decorators()
    reset_configuration()
    ConfigLoader.reset()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def engine(clock: FakeClock) -> ResolutionEngine:
    return ResolutionEngine(clock=clock, sleep=clock.sleep)


@pytest.fixture
def driver() -> FakeDriver:
    return FakeDriver()


@pytest.fixture
def site() -> Site:
    return Site(base_url="https://shop.example.com")


@pytest.fixture
def session(driver: FakeDriver, site: Site) -> Generator[Session, None, None]:
    with session_context.with_session(Session(driver=driver, site=site)) as active:
        yield active
