import re
from dataclasses import dataclass
from typing import Any, Optional

from .config import OPTION_SYMBOL_PATTERN, STRIKE_DIVISOR

_OPTION_RE = re.compile(OPTION_SYMBOL_PATTERN, re.ASCII)


@dataclass(frozen=True)
class OptionSymbol:
    underlying: Any
    option_type: Optional[str] = None
    strike: Optional[float] = None

    @property
    def is_option(self) -> bool:
        return self.option_type is not None


def decode_option_symbol(symbol: Any) -> OptionSymbol:
    """
    Splits a compact option ticker such as 'AAPL--240119C00150000' into
    underlying, right and strike. The strike carries three implied decimals.
    Plain tickers come back unchanged with no right or strike.
    """
    if not isinstance(symbol, str):
        return OptionSymbol(underlying=symbol)

    match = _OPTION_RE.search(symbol)
    if not match:
        return OptionSymbol(underlying=symbol)

    underlying, _expiry, right, strike_raw = match.groups()
    return OptionSymbol(
        underlying=underlying,
        option_type=right,
        strike=int(strike_raw) / STRIKE_DIVISOR,
    )
