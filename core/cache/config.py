"""Cache configuration: TTL constants for cached data types."""

from datetime import timedelta

from config import KLINES_CACHE_SECONDS

# Closed candles never change, but the last (open) candle does; keep this short.
CACHE_TTL_KLINES = timedelta(seconds=KLINES_CACHE_SECONDS)
