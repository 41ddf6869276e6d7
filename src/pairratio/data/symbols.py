"""User input to market symbol normalization."""

from __future__ import annotations

import re

from pairratio.errors import InvalidSymbolError

CN_EXCHANGE_SUFFIXES = (".SS", ".SZ", ".BJ")


def to_us_symbol(value: str) -> str:
    """Normalize a US ticker entered by a user."""
    symbol = value.strip().upper()
    if not symbol:
        raise InvalidSymbolError("Symbol must not be empty")
    return symbol


def to_cn_symbol(value: str) -> str:
    """Convert a mainland-China stock code into an exchange-suffixed symbol.

    ``"600000"`` becomes ``"600000.SS"`` and ``"000001"`` becomes
    ``"000001.SZ"``. Codes that already carry a suffix are returned as-is.
    """
    code = value.strip().upper()
    if any(suffix in code for suffix in CN_EXCHANGE_SUFFIXES):
        return code

    digits = re.sub(r"\D", "", code)
    if len(digits) != 6:
        raise InvalidSymbolError(f"Expected a 6-digit stock code, got {value!r}")

    # Beijing exchange
    if digits[0] == "8" or digits[:2] in {"43", "83", "87", "88"}:
        return f"{digits}.BJ"
    # Shanghai: main board, STAR market, ETFs
    if digits[0] == "6" or digits[:3] == "688" or digits[:2] == "51":
        return f"{digits}.SS"
    # Shenzhen: main board, ChiNext, ETFs
    if digits[0] in {"0", "3"} or digits[:2] == "15":
        return f"{digits}.SZ"
    return f"{digits}.SS"
