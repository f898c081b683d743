"""CLI tests with the Amadeus provider swapped for a scripted one."""

from __future__ import annotations

import json
from datetime import date, timedelta

import pytest
from click.testing import CliRunner

from fare_calendar_engine import cli as cli_module


@pytest.fixture
def depart() -> date:
    return date.today() + timedelta(days=20)


@pytest.fixture
def install_provider(monkeypatch, provider_factory):
    def _install(**kwargs):
        provider = provider_factory(**kwargs)

        class _Shim:
            @staticmethod
            def from_settings(_settings):
                return provider

        monkeypatch.setattr(cli_module, "AmadeusOfferProvider", _Shim)
        return provider

    return _install


def test_calendar_json_output(install_provider, offer_factory, depart):
    provider = install_provider(
        script={depart - timedelta(days=1): [offer_factory(3100, 3500)]},
        default=offer_factory(4000),
    )

    result = CliRunner().invoke(
        cli_module.cli,
        [
            "calendar", "del", "bom", depart.isoformat(),
            "--before", "2", "--after", "2", "--json-output",
        ],
    )

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert [r["offset_days"] for r in data["records"]] == [-2, -1, 0, 1, 2]
    assert data["stats"]["lowest_price"] == 3100
    assert data["stats"]["potential_savings"] == 900
    assert data["meta"]["cancelled"] is False
    assert provider.closed is True


def test_calendar_stream_prints_every_day(install_provider, offer_factory, depart):
    install_provider(default=offer_factory(2500))

    result = CliRunner().invoke(
        cli_module.cli,
        [
            "calendar", "DEL", "BOM", depart.isoformat(),
            "--variant", "15day", "--after", "3", "--stream",
        ],
    )

    assert result.exit_code == 0, result.output
    lines = [line for line in result.stdout.splitlines() if line.strip()]
    assert len(lines) == 4
    assert all("2500" in line for line in lines)


def test_calendar_without_credentials_exits_1(install_provider, depart):
    provider = install_provider(configured=False)

    result = CliRunner().invoke(
        cli_module.cli,
        ["calendar", "DEL", "BOM", depart.isoformat(), "--after", "1"],
    )

    assert result.exit_code == 1
    assert "credentials" in result.output
    assert provider.calls == []


def test_calendar_rejects_bad_date(install_provider):
    install_provider()

    result = CliRunner().invoke(
        cli_module.cli, ["calendar", "DEL", "BOM", "next tuesday"]
    )

    assert result.exit_code == 2


def test_health_reports_failure(install_provider):
    install_provider(configured=False)

    result = CliRunner().invoke(cli_module.cli, ["health"])

    assert result.exit_code == 1
    assert "FAIL" in result.stdout
