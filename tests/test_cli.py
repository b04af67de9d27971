"""Tests for the coinsight command-line interface.

**Feature: coinsight**
"""

import json
from datetime import datetime, timezone
from typing import Optional
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from coinsight.analysis import MultiTimeframeSynthesizer
from coinsight.cli import cli
from coinsight.models import Sample, TimeframeConfig
from coinsight.sources import BaseSource, SourceResolver, SyntheticGenerator


NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return NOW


class DemoSource(BaseSource):
    """Offline source serving the reproducible demo series."""

    name = "demo"

    def __init__(self):
        self.generator = SyntheticGenerator(clock=fixed_clock)

    def fetch_samples(self, coin_id: str, config: TimeframeConfig) -> list[Sample]:
        return self.generator.generate(coin_id, config)

    def lookup_coin_id(self, symbol: str) -> Optional[str]:
        return None


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def offline():
    """Patch the CLI to analyse the demo source instead of live APIs."""
    synthesizer = MultiTimeframeSynthesizer(
        SourceResolver([DemoSource()], generator=SyntheticGenerator(clock=fixed_clock)),
        clock=fixed_clock,
    )
    with patch("coinsight.cli.analyze._get_synthesizer", return_value=synthesizer):
        yield synthesizer


class TestCommandGroup:
    """Lazy command loading."""

    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for name in ("analyze", "mtf", "timeframes"):
            assert name in result.output

    def test_verbose_flag(self, runner):
        result = runner.invoke(cli, ["-v", "timeframes"])

        assert result.exit_code == 0, result.output
        assert "1Y" in result.output

    def test_unknown_command(self, runner):
        result = runner.invoke(cli, ["backtest"])
        assert result.exit_code == 2

    def test_timeframes(self, runner):
        result = runner.invoke(cli, ["timeframes"])

        assert result.exit_code == 0
        for code in ("15m", "12h", "6M", "1Y"):
            assert code in result.output


class TestAnalyzeCommand:
    """Single-timeframe analysis."""

    def test_table_and_summary(self, runner, offline):
        result = runner.invoke(cli, ["analyze", "btc", "-t", "1h", "-n", "5"])

        assert result.exit_code == 0, result.output
        assert "BTC" in result.output
        assert "Hint:" in result.output

    def test_json(self, runner, offline):
        result = runner.invoke(cli, ["analyze", "ETH", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["timeframe"] == "24h"
        assert data["source"] == "demo"
        assert data["synthetic"] is False
        assert len(data["candles"]) == 30

    def test_unsupported_timeframe(self, runner, offline):
        result = runner.invoke(cli, ["analyze", "BTC", "-t", "2h"])

        assert result.exit_code == 1
        assert "Unsupported Timeframe" in result.output

    def test_unknown_symbol(self, runner, offline):
        result = runner.invoke(cli, ["analyze", "NOTACOIN"])

        assert result.exit_code == 1
        assert "Unknown Symbol" in result.output


class TestMtfCommand:
    """Multi-timeframe analysis."""

    def test_table_and_outlook(self, runner, offline):
        result = runner.invoke(cli, ["mtf", "SOL"])

        assert result.exit_code == 0, result.output
        assert "Overall Analysis" in result.output
        assert "Recommendation" in result.output

    def test_json_without_candles(self, runner, offline):
        result = runner.invoke(cli, ["mtf", "BTC", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["symbol"] == "BTC"
        assert data["coin_id"] == "bitcoin"
        assert len(data["reports"]) == 9
        assert all("candles" not in report for report in data["reports"])
        assert set(data["synthesis"]) == {"overall_sentiment", "risk_level", "recommendation"}

    def test_json_with_candles(self, runner, offline):
        result = runner.invoke(cli, ["mtf", "BTC", "--json", "--candles"])

        data = json.loads(result.output)
        assert all(report["candles"] for report in data["reports"])

    def test_unknown_symbol(self, runner, offline):
        result = runner.invoke(cli, ["mtf", "NOTACOIN"])

        assert result.exit_code == 1
        assert "Unknown Symbol" in result.output
