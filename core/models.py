"""
Value objects shared by the normalizer, indicator engine, renderer and payload
assembler.

Everything here is frozen: each fetch/compute cycle builds fresh objects
instead of updating the previous ones.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Tuple

# ── Fixed indicator parameters ───────────────────────────────────────────────
SMA_PERIOD = 20
RSI_PERIOD = 14
MACD_FAST = 12
MACD_SLOW = 26
MACD_SIGNAL = 9
BOLLINGER_PERIOD = 20
BOLLINGER_STD_DEV = 2.0

HISTOGRAM_UP_COLOR = "rgba(0, 150, 136, 0.5)"
HISTOGRAM_DOWN_COLOR = "rgba(255, 82, 82, 0.5)"


@dataclass(frozen=True, slots=True)
class Candle:
    """One OHLCV bar; ``time`` is the open time in whole UTC seconds."""

    time: int
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0

    def to_dict(self, include_volume: bool = True) -> dict:
        data = {
            "time": self.time,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
        }
        if include_volume:
            data["volume"] = self.volume
        return data


class CandleSeries:
    """Immutable, strictly time-ordered sequence of candles."""

    __slots__ = ("_candles",)

    def __init__(self, candles=()):
        candles = tuple(candles)
        for prev, cur in zip(candles, candles[1:]):
            if cur.time <= prev.time:
                raise ValueError(
                    f"Candle times must be strictly increasing ({prev.time} -> {cur.time})"
                )
        self._candles: Tuple[Candle, ...] = candles

    def __len__(self) -> int:
        return len(self._candles)

    def __iter__(self) -> Iterator[Candle]:
        return iter(self._candles)

    def __getitem__(self, index):
        return self._candles[index]

    def __eq__(self, other) -> bool:
        return isinstance(other, CandleSeries) and self._candles == other._candles

    def __hash__(self) -> int:
        return hash(self._candles)

    def __repr__(self) -> str:
        if not self._candles:
            return "CandleSeries([])"
        return f"CandleSeries({len(self)} candles, {self._candles[0].time}..{self._candles[-1].time})"

    @property
    def candles(self) -> Tuple[Candle, ...]:
        return self._candles

    @property
    def times(self) -> Tuple[int, ...]:
        return tuple(c.time for c in self._candles)

    @property
    def closes(self) -> Tuple[float, ...]:
        return tuple(c.close for c in self._candles)

    @property
    def time_set(self) -> frozenset:
        return frozenset(self.times)

    def is_empty(self) -> bool:
        return not self._candles


@dataclass(frozen=True, slots=True)
class LinePoint:
    time: int
    value: float

    def to_dict(self) -> dict:
        return {"time": self.time, "value": self.value}


@dataclass(frozen=True, slots=True)
class BollingerPoint:
    time: int
    upper: float
    middle: float
    lower: float

    def to_dict(self) -> dict:
        return {"time": self.time, "upper": self.upper, "middle": self.middle, "lower": self.lower}


@dataclass(frozen=True, slots=True)
class MacdPoint:
    """One time step of MACD, used when the three lines are read together."""

    time: int
    macd_line: float
    signal_line: float
    histogram: float

    @property
    def histogram_color(self) -> str:
        return HISTOGRAM_UP_COLOR if self.histogram >= 0 else HISTOGRAM_DOWN_COLOR


@dataclass(frozen=True)
class MacdSeries:
    """MACD line, signal line and histogram over the same timestamps."""

    macd_line: Tuple[LinePoint, ...] = ()
    signal_line: Tuple[LinePoint, ...] = ()
    histogram: Tuple[LinePoint, ...] = ()

    def __len__(self) -> int:
        return len(self.histogram)

    def points(self) -> Tuple[MacdPoint, ...]:
        return tuple(
            MacdPoint(m.time, m.value, s.value, h.value)
            for m, s, h in zip(self.macd_line, self.signal_line, self.histogram)
        )


@dataclass(frozen=True)
class IndicatorConfig:
    """Which indicators to compute. Periods are fixed (see module constants)."""

    sma: bool = True
    rsi: bool = True
    macd: bool = True
    bollinger: bool = True

    @classmethod
    def from_selection(cls, selection: str) -> "IndicatorConfig":
        """Build from the single-select setting: "all", "none" or one indicator name."""
        selection = (selection or "all").strip().lower()
        if selection == "all":
            return cls()
        if selection == "none":
            return cls(sma=False, rsi=False, macd=False, bollinger=False)
        names = {"sma", "rsi", "macd", "bollinger"}
        if selection not in names:
            raise ValueError(f"Unknown indicator selection: {selection!r}")
        return cls(**{name: name == selection for name in names})


@dataclass(frozen=True)
class IndicatorSet:
    """Computed indicators for one CandleSeries; ``None`` means not requested."""

    sma: Optional[Tuple[LinePoint, ...]] = None
    rsi: Optional[Tuple[LinePoint, ...]] = None
    macd: Optional[MacdSeries] = None
    bollinger: Optional[Tuple[BollingerPoint, ...]] = None


@dataclass(frozen=True)
class TimeframeResult:
    """Everything produced for one timeframe of one analysis request."""

    timeframe: str
    series: CandleSeries
    indicators: IndicatorSet
    chart_data_uri: str


@dataclass(frozen=True)
class MultiTimeframeBundle:
    primary: TimeframeResult
    additional: Dict[str, TimeframeResult] = field(default_factory=dict)
    failures: Dict[str, str] = field(default_factory=dict)
