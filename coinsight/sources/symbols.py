"""Ticker symbol to asset id lookup."""

import logging
from typing import Sequence

from coinsight.sources.base import BaseSource, SourceError, SymbolNotFoundError

logger = logging.getLogger(__name__)

# Common tickers resolved without a network round-trip
COIN_IDS = {
    "btc": "bitcoin",
    "eth": "ethereum",
    "bnb": "binancecoin",
    "ada": "cardano",
    "dot": "polkadot",
    "xrp": "ripple",
    "ltc": "litecoin",
    "link": "chainlink",
    "bch": "bitcoin-cash",
    "xlm": "stellar",
    "usdt": "tether",
    "usdc": "usd-coin",
    "sol": "solana",
    "avax": "avalanche-2",
    "matic": "matic-network",
    "doge": "dogecoin",
    "shib": "shiba-inu",
    "trx": "tron",
    "atom": "cosmos",
    "uni": "uniswap",
}


def get_coin_id(symbol: str, sources: Sequence[BaseSource] = ()) -> str:
    """Resolve a ticker symbol to an asset id.

    Checks the built-in table first, then asks each source in order.

    Args:
        symbol: Ticker symbol (case-insensitive).
        sources: Sources to query when the symbol is not in the table.

    Returns:
        Asset id.

    Raises:
        SymbolNotFoundError: If no table entry or source knows the symbol.
    """
    key = symbol.strip().lower()
    if not key:
        raise SymbolNotFoundError("Symbol must not be empty")

    if key in COIN_IDS:
        return COIN_IDS[key]

    for source in sources:
        try:
            coin_id = source.lookup_coin_id(key)
        except SourceError as e:
            logger.warning("Symbol lookup on %s failed: %s", source.name, e)
            continue
        if coin_id:
            logger.debug("Resolved %s to %s via %s", symbol, coin_id, source.name)
            return coin_id

    raise SymbolNotFoundError(f"Coin '{symbol.upper()}' was not found on any source")
