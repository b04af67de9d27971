"""Analyze commands for coinsight CLI.

Calculates and displays indicators for one timeframe, or the
multi-timeframe synthesis across all of them.
"""

import json
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from coinsight.analysis.commentary import (
    describe_timeframe,
    ema_position,
    interpret_bollinger,
    interpret_rsi,
    summarize_series,
)
from coinsight.models import (
    MultiTimeframeAnalysis,
    RiskLevel,
    TimeframeCode,
    TimeframeReport,
    Trend,
    UnsupportedTimeframeError,
)
from coinsight.sources import SymbolNotFoundError, get_coin_id

console = Console()

TREND_COLORS = {
    Trend.UPTREND: "green",
    Trend.DOWNTREND: "red",
    Trend.SIDEWAYS: "yellow",
    Trend.INSUFFICIENT_DATA: "dim",
    Trend.UNKNOWN: "dim",
}


def _get_synthesizer():
    """Build the synthesizer from the user's configuration."""
    from coinsight.config import ConfigError, build_synthesizer, load_settings

    try:
        return build_synthesizer(load_settings())
    except ConfigError as e:
        _fail("Configuration Error", str(e))


def _fail(title: str, message: str) -> None:
    """Print an error panel and exit with status 1."""
    console.print(Panel(
        f"[red]{escape(message)}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


def _fmt(value: Optional[float], decimals: int = 2) -> str:
    """Format a number, showing N/A for missing indicator values."""
    if value is None:
        return "[dim]N/A[/dim]"
    return f"{value:,.{decimals}f}"


def _sentiment_color(text: str) -> str:
    if "Bullish" in text:
        return "green"
    if "Bearish" in text:
        return "red"
    return "yellow"


def _report_table(report: TimeframeReport, rows: int) -> Table:
    """Build the candle/indicator table for the latest ``rows`` candles."""
    table = Table(
        title=f"{report.label} candles (latest {min(rows, len(report.candles))})",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Time", style="bold")
    table.add_column("Open", justify="right")
    table.add_column("High", justify="right")
    table.add_column("Low", justify="right")
    table.add_column("Close", justify="right")
    table.add_column("EMA 20", justify="right")
    table.add_column("RSI 14", justify="right")
    table.add_column("BB Upper", justify="right")
    table.add_column("BB Lower", justify="right")

    for candle in report.candles[-rows:]:
        table.add_row(
            candle.timestamp.strftime("%Y-%m-%d %H:%M"),
            _fmt(candle.open),
            _fmt(candle.high),
            _fmt(candle.low),
            _fmt(candle.close),
            _fmt(candle.ema20),
            _fmt(candle.rsi14),
            _fmt(candle.bb_upper),
            _fmt(candle.bb_lower),
        )

    return table


def _indicator_panel(symbol: str, report: TimeframeReport) -> Panel:
    """Summarize the latest indicator readings."""
    latest = report.candles[-1]
    readings = latest.indicators
    rsi_signal, rsi_color = interpret_rsi(readings.rsi14)
    bb_signal, bb_color = interpret_bollinger(
        latest.close, readings.bb_upper, readings.bb_middle, readings.bb_lower
    )
    position = ema_position(latest)
    trend_color = TREND_COLORS[report.trend]

    lines = [
        f"[bold]Trend:[/bold] [{trend_color}]{report.trend.value}[/{trend_color}]",
        f"[bold]Period change:[/bold] {report.period_change:+.2f}%",
        f"[bold]Volatility:[/bold] {report.volatility * 100:.2f}%",
        f"[bold]RSI:[/bold] {_fmt(readings.rsi14)} [{rsi_color}]{rsi_signal}[/{rsi_color}]",
        f"[bold]Bollinger:[/bold] [{bb_color}]{bb_signal}[/{bb_color}]",
    ]
    if position is not None:
        color = "green" if position == "above" else "red"
        lines.append(f"[bold]EMA 20:[/bold] [{color}]Price {position} EMA[/{color}]")

    lines.append("")
    lines.append(summarize_series(report.candles, symbol, report.timeframe.value))
    lines.append("")
    lines.append(f"[dim]{describe_timeframe(report)}[/dim]")

    return Panel(
        "\n".join(lines),
        title=f"[bold]{symbol} - {report.label}[/bold]",
        border_style="cyan",
    )


def _synthetic_warning(source: Optional[str]) -> None:
    console.print(
        f"[yellow]⚠ All market data sources failed; showing {source} demo data, "
        "not real prices.[/yellow]"
    )


@click.command()
@click.argument("symbol")
@click.option(
    "--timeframe", "-t",
    default="24h",
    show_default=True,
    help="Timeframe: 15m, 30m, 1h, 12h, 24h, 7d, 30d, 6M, 1Y.",
)
@click.option(
    "--rows", "-n",
    default=10,
    show_default=True,
    type=click.IntRange(min=1),
    help="Number of recent candles to show.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON.")
def analyze(symbol: str, timeframe: str, rows: int, as_json: bool) -> None:
    """Calculate indicators for one timeframe.

    SYMBOL is the coin ticker (e.g., BTC, ETH, SOL).

    \b
    Examples:
      coinsight analyze BTC
      coinsight analyze ETH -t 1h -n 20
      coinsight analyze SOL --json
    """
    try:
        code = TimeframeCode.parse(timeframe)
    except UnsupportedTimeframeError as e:
        _fail("Unsupported Timeframe", str(e))

    synthesizer = _get_synthesizer()
    symbol = symbol.upper()

    try:
        coin_id = get_coin_id(symbol, synthesizer.resolver.sources)
    except SymbolNotFoundError as e:
        _fail("Unknown Symbol", str(e))

    if not as_json:
        console.print(f"[dim]Fetching {code.value} data for {symbol} ({coin_id})...[/dim]")

    report = synthesizer.analyze_timeframe(coin_id, code)

    if as_json:
        click.echo(report.model_dump_json(indent=2))
        return

    if report.synthetic:
        _synthetic_warning(report.source)

    if not report.available:
        console.print(f"[yellow]No candles available for {symbol} on {code.value}.[/yellow]")
        return

    console.print(_report_table(report, rows))
    console.print(_indicator_panel(symbol, report))


def _synthesis_json(analysis: MultiTimeframeAnalysis, include_candles: bool) -> str:
    exclude = None if include_candles else {"reports": {"__all__": {"candles"}}}
    data = analysis.model_dump(mode="json", exclude=exclude)
    return json.dumps(data, indent=2)


@click.command()
@click.argument("symbol")
@click.option("--json", "as_json", is_flag=True, help="Print the analysis as JSON.")
@click.option(
    "--candles/--no-candles",
    default=False,
    show_default=True,
    help="Include candle series in JSON output.",
)
def mtf(symbol: str, as_json: bool, candles: bool) -> None:
    """Multi-timeframe analysis with an overall outlook.

    Analyses nine timeframes from 15 minutes to 1 year, then combines
    their trends and volatility into sentiment, risk and a recommendation.

    SYMBOL is the coin ticker (e.g., BTC, ETH, SOL).

    \b
    Examples:
      coinsight mtf BTC
      coinsight mtf ETH --json
    """
    synthesizer = _get_synthesizer()
    symbol = symbol.upper()

    if not as_json:
        console.print(f"[dim]Fetching multi-timeframe data for {symbol}...[/dim]")

    try:
        analysis = synthesizer.synthesize(symbol)
    except SymbolNotFoundError as e:
        _fail("Unknown Symbol", str(e))

    if as_json:
        click.echo(_synthesis_json(analysis, candles))
        return

    table = Table(
        title=f"Multi-Timeframe Analysis: {analysis.symbol}",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Timeframe", style="bold")
    table.add_column("Duration")
    table.add_column("Trend", justify="center")
    table.add_column("Change", justify="right")
    table.add_column("Volatility", justify="right")
    table.add_column("RSI", justify="right")
    table.add_column("Source")

    synthetic_rows = 0
    for report in analysis.reports:
        if not report.available:
            table.add_row(
                report.timeframe.value, report.label, "[dim]Unknown[/dim]",
                "[dim]N/A[/dim]", "[dim]N/A[/dim]", "[dim]N/A[/dim]",
                f"[red]{escape((report.error or 'unavailable')[:30])}[/red]",
            )
            continue

        color = TREND_COLORS[report.trend]
        change_color = "green" if report.period_change >= 0 else "red"
        source = report.source or ""
        if report.synthetic:
            synthetic_rows += 1
            source = f"[yellow]{source} ⚠[/yellow]"

        table.add_row(
            report.timeframe.value,
            report.label,
            f"[{color}]{report.trend.value}[/{color}]",
            f"[{change_color}]{report.period_change:+.2f}%[/{change_color}]",
            f"{report.volatility * 100:.2f}%",
            _fmt(report.candles[-1].rsi14),
            source,
        )

    console.print(table)

    if synthetic_rows:
        console.print(
            f"[yellow]⚠ {synthetic_rows} timeframe(s) use demo data because every "
            "source failed.[/yellow]"
        )

    synthesis = analysis.synthesis
    sentiment = synthesis.overall_sentiment.value
    risk_color = {
        RiskLevel.LOW: "green",
        RiskLevel.MEDIUM: "yellow",
        RiskLevel.HIGH: "red",
    }[synthesis.risk_level]
    sentiment_color = _sentiment_color(sentiment)

    console.print(Panel(
        f"[bold]Sentiment:[/bold] [{sentiment_color}]{sentiment}[/{sentiment_color}]\n"
        f"[bold]Risk:[/bold] [{risk_color}]{synthesis.risk_level.value}[/{risk_color}]\n"
        f"[bold]Recommendation:[/bold] {synthesis.recommendation.value}\n\n"
        "[dim]For educational purposes only. Do your own research before trading.[/dim]",
        title=f"[bold]Overall Analysis - {analysis.symbol}[/bold]",
        border_style=sentiment_color,
    ))
