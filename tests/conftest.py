"""Shared pytest fixtures for careride tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from careride.config.models import StoreConfig
from careride.config.settings import CareSettings
from careride.domain.models import MS_PER_DAY
from careride.infrastructure.store import Store
from careride.services.telemetry import disable_telemetry

# 2026-01-01T00:00:00Z
NOW = 1_767_225_600_000


class FakeClock:
    """Manually advanced clock in epoch milliseconds."""

    def __init__(self, start: int = NOW) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, *, days: float = 0, ms: int = 0) -> None:
        self.now += int(days * MS_PER_DAY) + ms


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Iterator[None]:
    yield
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings(tmp_path: Path) -> CareSettings:
    """Settings for a seeded in-memory store rooted at a temp directory."""
    return CareSettings(root=tmp_path, store=StoreConfig(in_memory=True))


@pytest.fixture
def store(settings: CareSettings, clock: FakeClock) -> Iterator[Store]:
    """Seeded in-memory store driven by the fake clock."""
    s = Store(settings, clock=clock)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def empty_store(tmp_path: Path, clock: FakeClock) -> Iterator[Store]:
    """In-memory store without the demo dataset."""
    settings = CareSettings(root=tmp_path, store=StoreConfig(in_memory=True, seed=False))
    s = Store(settings, clock=clock)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def _isolated_workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run CLI commands from a temp directory so each test gets its own store.

    Use via ``@pytest.mark.usefixtures("_isolated_workspace")``.
    """
    monkeypatch.delenv("CARERIDE_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
