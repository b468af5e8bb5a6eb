"""Tests for the console UI."""

from __future__ import annotations

import asyncio

import pytest
from typer.testing import CliRunner

from conftest import FakeListingsService
from mars_estate import cli
from mars_estate.connectivity import StaticConnectivityProbe
from mars_estate.connectors import FetchFailure
from mars_estate.models import Listing, ListingsFilter

runner = CliRunner()


@pytest.fixture
def fake_service(monkeypatch: pytest.MonkeyPatch, mock_listings: list[Listing]) -> FakeListingsService:
    service = FakeListingsService(result=mock_listings)
    monkeypatch.setattr(cli, "_build_service", lambda cfg: service)
    return service


@pytest.fixture
def online(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        cli,
        "_build_probe",
        lambda cfg, offline: StaticConnectivityProbe(connected=not offline),
    )


def test_listings_table(fake_service: FakeListingsService, online: None) -> None:
    result = runner.invoke(cli.app, ["listings", "--filter", "rent"])
    assert result.exit_code == 0, result.output
    assert "424906" in result.output
    assert "424907" in result.output
    assert fake_service.calls == [ListingsFilter.SHOW_RENT]


def test_select_shows_detail(fake_service: FakeListingsService, online: None) -> None:
    result = runner.invoke(cli.app, ["listings", "--select", "424907"])
    assert result.exit_code == 0, result.output
    assert "Listing 424907" in result.output
    assert "$8,000/month" in result.output


def test_select_unknown_id(fake_service: FakeListingsService, online: None) -> None:
    result = runner.invoke(cli.app, ["listings", "--select", "missing"])
    assert result.exit_code == 1
    assert "Listing not found" in result.output


def test_offline_exits_nonzero(fake_service: FakeListingsService, online: None) -> None:
    result = runner.invoke(cli.app, ["listings", "--offline"])
    assert result.exit_code == 1
    assert "No network connection" in result.output
    assert fake_service.calls == []


def test_fetch_error_exits_nonzero(fake_service: FakeListingsService, online: None) -> None:
    fake_service.error = FetchFailure("HTTP 500")
    result = runner.invoke(cli.app, ["listings"])
    assert result.exit_code == 1
    assert "Could not load listings" in result.output


def test_unknown_filter(fake_service: FakeListingsService, online: None) -> None:
    result = runner.invoke(cli.app, ["listings", "--filter", "lease"])
    assert result.exit_code == 2
    assert "Unknown listings filter" in result.output


class _LoopCheckingProbe(StaticConnectivityProbe):
    def __init__(self) -> None:
        super().__init__(connected=True)
        self.ran_inside_loop: bool | None = None

    def is_connected(self) -> bool:
        try:
            asyncio.get_running_loop()
            self.ran_inside_loop = True
        except RuntimeError:
            self.ran_inside_loop = False
        return True


def test_connectivity_checked_before_event_loop(
    fake_service: FakeListingsService, monkeypatch: pytest.MonkeyPatch
) -> None:
    probe = _LoopCheckingProbe()
    monkeypatch.setattr(cli, "_build_probe", lambda cfg, offline: probe)

    result = runner.invoke(cli.app, ["listings"])

    assert result.exit_code == 0, result.output
    assert probe.ran_inside_loop is False
