"""Click CLI commands for cryptoscope."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import click
import structlog

from cryptoscope.analysis.signals import MarketSummary, summarize
from cryptoscope.config import AppConfig
from cryptoscope.engine.aggregator import IndicatorBundle, aggregate, aggregate_many
from cryptoscope.market.errors import MarketDataError
from cryptoscope.market.fake import generate_candles
from cryptoscope.market.klines import load_candles
from cryptoscope.market.types import Candle, Interval
from cryptoscope.utils.logging import setup_logging, start_run
from cryptoscope.utils.time import format_timestamp

_CANDLE_SUFFIXES = (".json", ".csv")


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """cryptoscope: technical indicators for crypto candle series."""
    try:
        config = AppConfig()
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e
    setup_logging(level=config.log_level, log_format=config.log_format)
    start_run(interval=config.interval)
    ctx.obj = config


@cli.command()
@click.argument(
    "path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--symbol", default="", help="Symbol label for the output.")
@click.option(
    "--price",
    type=float,
    default=None,
    help="Price to interpret against (default: last close).",
)
@click.option("--json", "as_json", is_flag=True, help="Print JSON output.")
@click.pass_obj
def analyze(
    config: AppConfig,
    path: Path,
    symbol: str,
    price: float | None,
    as_json: bool,
) -> None:
    """Compute indicators for a .json or .csv candle file."""
    try:
        candles = load_candles(path)
    except MarketDataError as e:
        raise click.ClickException(str(e)) from e

    _report(config, candles, symbol or path.stem.upper(), price, as_json)


@cli.command()
@click.option(
    "--count",
    default=1000,
    type=click.IntRange(min=0),
    help="Number of synthetic candles (default: 1000).",
)
@click.option("--symbol", default="DEMOUSDT", help="Symbol label for the output.")
@click.option("--json", "as_json", is_flag=True, help="Print JSON output.")
@click.pass_obj
def demo(config: AppConfig, count: int, symbol: str, as_json: bool) -> None:
    """Compute indicators over a synthetic sinusoidal candle series."""
    candles = generate_candles(count, interval=Interval(config.interval))
    _report(config, candles, symbol, None, as_json)


@cli.command()
@click.argument(
    "directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option(
    "--symbols",
    default=None,
    help="Comma-separated symbols (default: the configured watchlist).",
)
@click.option("--json", "as_json", is_flag=True, help="Print JSON output.")
@click.pass_obj
def watchlist(
    config: AppConfig,
    directory: Path,
    symbols: str | None,
    as_json: bool,
) -> None:
    """Compute indicators for every watchlist symbol in a directory.

    Each symbol is read from DIRECTORY/<SYMBOL>.json or .csv.
    """
    if symbols:
        names = [s.strip().upper() for s in symbols.split(",") if s.strip()]
    else:
        names = list(config.watchlist)

    candles_by_symbol: dict[str, list[Candle]] = {}
    missing: list[str] = []
    for name in names:
        path = _find_candle_file(directory, name)
        if path is None:
            missing.append(name)
            continue
        try:
            candles_by_symbol[name] = _window(config, load_candles(path))
        except MarketDataError as e:
            raise click.ClickException(f"{name}: {e}") from e

    if missing:
        raise click.ClickException(
            f"No candle file for {', '.join(missing)} in {directory}"
        )

    bundles = aggregate_many(candles_by_symbol, config.indicators)

    rows = []
    for name, bundle in bundles.items():
        candles = candles_by_symbol[name]
        price = float(candles[-1].close) if candles else 0.0
        rows.append((name, candles, bundle, summarize(bundle, price, config.signals)))

    if as_json:
        payload = [_to_payload(*row) for row in rows]
        click.echo(json.dumps(payload, indent=2))
    else:
        _print_watchlist(rows)


@cli.command()
@click.pass_obj
def config(cfg: AppConfig) -> None:
    """Show current configuration."""
    click.echo("=== Cryptoscope Configuration ===\n")

    click.echo(f"Log Level:    {cfg.log_level}")
    click.echo(f"Log Format:   {cfg.log_format}")
    click.echo(f"Interval:     {cfg.interval} ({Interval(cfg.interval).label})")
    click.echo(f"Kline Limit:  {cfg.kline_limit}")
    click.echo("")

    ind = cfg.indicators
    click.echo("[Indicators]")
    click.echo(f"  RSI Period:       {ind.rsi_period}")
    click.echo(f"  MACD:             {ind.macd_fast}/{ind.macd_slow}/{ind.macd_signal}")
    click.echo(f"  Bollinger:        {ind.bollinger_period} x {ind.bollinger_multiplier}")
    click.echo(f"  EMA Fast/Slow:    {ind.ema_fast}/{ind.ema_slow}")
    click.echo("")

    click.echo("[Signals]")
    click.echo(f"  RSI Overbought:   {cfg.signals.rsi_overbought}")
    click.echo(f"  RSI Oversold:     {cfg.signals.rsi_oversold}")
    click.echo("")

    click.echo(f"Watchlist:    {', '.join(cfg.watchlist)}")


def _window(config: AppConfig, candles: Sequence[Candle]) -> list[Candle]:
    """Keep the most recent `kline_limit` candles."""
    return list(candles[-config.kline_limit :])


def _find_candle_file(directory: Path, symbol: str) -> Path | None:
    for stem in (symbol, symbol.lower()):
        for suffix in _CANDLE_SUFFIXES:
            path = directory / f"{stem}{suffix}"
            if path.is_file():
                return path
    return None


def _report(
    config: AppConfig,
    candles: Sequence[Candle],
    symbol: str,
    price: float | None,
    as_json: bool,
) -> None:
    structlog.contextvars.bind_contextvars(symbol=symbol)
    candles = _window(config, candles)
    bundle = aggregate(candles, config.indicators)
    if price is None:
        price = float(candles[-1].close) if candles else 0.0
    summary = summarize(bundle, price, config.signals)

    if as_json:
        payload = _to_payload(symbol, candles, bundle, summary)
        click.echo(json.dumps(payload, indent=2))
    else:
        _print_report(config, symbol, candles, bundle, summary)


def _to_payload(
    symbol: str,
    candles: Sequence[Candle],
    bundle: IndicatorBundle,
    summary: MarketSummary,
) -> dict[str, Any]:
    return {
        "symbol": symbol,
        "candles": len(candles),
        "price": summary.price,
        "asOf": _as_of(candles),
        "indicators": bundle.to_dict(),
        "summary": {
            "rsi": summary.rsi_state.value,
            "macd": summary.macd_bias.value,
            "bollinger": summary.band_position.value,
            "ema50": summary.ema50_position.value,
            "ema200": summary.ema200_position.value,
        },
    }


def _print_report(
    config: AppConfig,
    symbol: str,
    candles: Sequence[Candle],
    bundle: IndicatorBundle,
    summary: MarketSummary,
) -> None:
    """Format and print an indicator report to the CLI."""
    ind = config.indicators
    rsi_label = f"RSI ({ind.rsi_period}):"
    fast_label = f"EMA ({ind.ema_fast}):"
    slow_label = f"EMA ({ind.ema_slow}):"

    click.echo(f"\n{symbol} ({len(candles)} candles)")
    as_of = _as_of(candles)
    if as_of is not None:
        click.echo(f"As Of:            {as_of}")
    click.echo(f"Price:            {summary.price:,.2f}")

    click.echo("\nIndicators:")
    click.echo(f"  {rsi_label:<16}{bundle.rsi:.2f} ({summary.rsi_state.value})")
    click.echo(f"  MACD Line:      {bundle.macd.macd_line:.4f}")
    click.echo(f"  Signal Line:    {bundle.macd.signal_line:.4f}")
    click.echo(
        f"  Histogram:      {bundle.macd.histogram:.4f} ({summary.macd_bias.value})"
    )
    click.echo(
        f"  Bollinger:      {bundle.bollinger.upper:,.2f} / "
        f"{bundle.bollinger.middle:,.2f} / {bundle.bollinger.lower:,.2f} "
        f"({summary.band_position.value})"
    )
    click.echo(
        f"  {fast_label:<16}{bundle.ema50:,.2f} ({summary.ema50_position.value})"
    )
    click.echo(
        f"  {slow_label:<16}{bundle.ema200:,.2f} ({summary.ema200_position.value})"
    )


def _print_watchlist(
    rows: Sequence[tuple[str, Sequence[Candle], IndicatorBundle, MarketSummary]],
) -> None:
    """One line per symbol: price, RSI, MACD bias and band position."""
    click.echo(
        f"\n{'Symbol':<12}{'Candles':>8}{'Price':>14}{'RSI':>8}  "
        f"{'RSI State':<11}{'MACD':<9}Bollinger"
    )
    for name, candles, bundle, summary in rows:
        click.echo(
            f"{name:<12}{len(candles):>8}{summary.price:>14,.2f}{bundle.rsi:>8.2f}  "
            f"{summary.rsi_state.value:<11}{summary.macd_bias.value:<9}"
            f"{summary.band_position.value}"
        )


def _as_of(candles: Sequence[Candle]) -> str | None:
    """Close time of the last candle, or None for an empty series."""
    if not candles:
        return None
    return format_timestamp(candles[-1].close_datetime)
