from __future__ import annotations

import pytest

from pairratio import cli
from pairratio.cli import apply_cli_overrides, build_parser
from pairratio.config import Settings
from pairratio.errors import InvalidPairFailure


def test_cli_overrides_produce_expected_settings() -> None:
    parser = build_parser()
    args = parser.parse_args(
        [
            "--pair",
            "QQQ/GLD",
            "--interval",
            "1 month",
            "--data-source",
            "csv",
            "--historical-dir",
            "historical_data",
            "--reports-dir",
            "reports/test",
        ]
    )
    settings = apply_cli_overrides(Settings(), args)

    assert settings.default_interval == "1mo"
    assert settings.data_source == "csv"
    assert settings.historical_data_dir == "historical_data"
    assert settings.reports_dir == "reports/test"


def test_cli_requires_exactly_one_action() -> None:
    parser = build_parser()

    with pytest.raises(ValueError, match="required"):
        apply_cli_overrides(Settings(), parser.parse_args([]))
    with pytest.raises(ValueError, match="only one action"):
        apply_cli_overrides(Settings(), parser.parse_args(["--pair", "QQQ/GLD", "--quotes"]))


def test_cli_rejects_watch_without_pair() -> None:
    args = build_parser().parse_args(["--quotes", "--watch"])

    with pytest.raises(ValueError, match="--watch requires --pair"):
        apply_cli_overrides(Settings(), args)


def test_cli_rejects_malformed_pair() -> None:
    args = build_parser().parse_args(["--pair", "QQQ"])

    with pytest.raises(InvalidPairFailure):
        apply_cli_overrides(Settings(), args)


def test_cli_rejects_unknown_market() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--benchmarks", "AAPL", "--market", "eu"])


def test_main_dispatches_to_runtime(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("pairratio.config.load_dotenv", lambda *args, **kwargs: None)
    monkeypatch.delenv("TRADING_PAIRS", raising=False)
    monkeypatch.delenv("DATA_SOURCE", raising=False)
    calls: list[tuple[str, object]] = []

    def fake_show_ratio(settings: Settings, pair: str, report_path: str | None = None) -> int:
        calls.append(("ratio", (pair, settings.default_interval, report_path)))
        return 0

    def fake_show_benchmarks(settings: Settings, symbol: str, market: str = "us") -> int:
        calls.append(("benchmarks", (symbol, market)))
        return 0

    monkeypatch.setattr(cli, "show_ratio", fake_show_ratio)
    monkeypatch.setattr(cli, "show_benchmarks", fake_show_benchmarks)

    assert cli.main(["--pair", "QQQ/GLD", "--interval", "1wk", "--report", "x.html"]) == 0
    assert cli.main(["--benchmarks", "600000", "--market", "cn"]) == 0
    assert calls == [
        ("ratio", ("QQQ/GLD", "1wk", "x.html")),
        ("benchmarks", ("600000", "cn")),
    ]


def test_main_returns_config_error_code(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("pairratio.config.load_dotenv", lambda *args, **kwargs: None)
    monkeypatch.delenv("TRADING_PAIRS", raising=False)

    assert cli.main(["--pair", "/XYZ"]) == 2
