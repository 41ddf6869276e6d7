"""Command-line interface for pair ratio charts."""

from __future__ import annotations

import argparse
import sys

from pairratio.config import Settings
from pairratio.domain.models import Interval, PairSymbol, normalize_interval
from pairratio.errors import PairRatioError
from pairratio.runtime import show_benchmarks, show_quotes, show_ratio, watch_ratio


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(description="Ratio charts for pairs of traded instruments")
    parser.add_argument("--pair", type=str, help="Pair identifier, e.g. QQQ/GLD")
    parser.add_argument(
        "--interval",
        type=str,
        help=f"Sampling interval ({', '.join(item.value for item in Interval)})",
    )
    parser.add_argument("--report", type=str, help="Output HTML path for the ratio chart")
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Keep refreshing the pair on half-hour boundaries until interrupted",
    )
    parser.add_argument(
        "--quotes",
        action="store_true",
        help="Show snapshot ratios for the configured trading pairs, then exit",
    )
    parser.add_argument(
        "--benchmarks",
        type=str,
        metavar="SYMBOL",
        help="Show snapshot ratios of SYMBOL against the benchmark set, then exit",
    )
    parser.add_argument("--market", choices=["us", "cn"], default="us", help="Benchmark market")
    parser.add_argument("--data-source", choices=["yahoo", "csv"], help="History data source")
    parser.add_argument("--historical-dir", type=str, help="CSV historical data directory")
    parser.add_argument("--reports-dir", type=str, help="Directory for generated reports")
    return parser


def apply_cli_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Apply CLI values onto environment-derived settings and check flag combinations."""
    actions = [bool(args.pair), bool(args.quotes), bool(args.benchmarks)]
    if sum(actions) > 1:
        raise ValueError("Use only one action: --pair, --quotes or --benchmarks")
    if not any(actions):
        raise ValueError("One of --pair, --quotes or --benchmarks is required")
    if args.watch and not args.pair:
        raise ValueError("--watch requires --pair")
    if args.report and not args.pair:
        raise ValueError("--report requires --pair")
    if args.pair:
        PairSymbol.parse(args.pair)

    overrides: dict[str, object] = {}
    if args.interval:
        overrides["default_interval"] = normalize_interval(args.interval)
    if args.data_source:
        overrides["data_source"] = args.data_source
    if args.historical_dir:
        overrides["historical_data_dir"] = args.historical_dir
    if args.reports_dir:
        overrides["reports_dir"] = args.reports_dir
    return settings.with_overrides(**overrides)


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = apply_cli_overrides(Settings.from_env(), args)
    except (ValueError, PairRatioError) as exc:
        print(f"Configuration error: {exc}")
        return 2
    if args.quotes:
        return show_quotes(settings)
    if args.benchmarks:
        return show_benchmarks(settings, args.benchmarks, market=args.market)
    if args.watch:
        return watch_ratio(settings, args.pair, report_path=args.report)
    return show_ratio(settings, args.pair, report_path=args.report)


if __name__ == "__main__":
    sys.exit(main())
