"""
Tests for the kline normalizer.

Usage:
    pytest testing/test_normalizer.py -v
"""

import pytest

from conftest import BASE_TIME_MS, HOUR_MS, make_kline, make_klines
from core.errors import MalformedRecord
from core.models import Candle, CandleSeries
from core.normalizer import normalize_klines, normalize_record, series_to_frame


class TestNormalizeRecord:
    def test_binance_record(self):
        record = [1_700_000_123_456, "100.5", "110.0", "95.25", "105.0", "1234.5", 1_700_003_723_455, "0", 5]
        candle = normalize_record(record)

        assert candle == Candle(time=1_700_000_123, open=100.5, high=110.0, low=95.25, close=105.0, volume=1234.5)

    def test_milliseconds_are_truncated(self):
        candle = normalize_record([1999, "1", "1", "1", "1", "1"])
        assert candle.time == 1

    @pytest.mark.parametrize("millis,seconds", [(-1999, -1), (-1000, -1), (-999, 0)])
    def test_negative_milliseconds_truncate_toward_zero(self, millis, seconds):
        assert normalize_record([millis, "1", "1", "1", "1", "1"]).time == seconds

    def test_numeric_fields_accepted(self):
        candle = normalize_record([BASE_TIME_MS, 1, 2.5, 0.5, 2, 0])
        assert (candle.open, candle.high, candle.low, candle.close, candle.volume) == (1.0, 2.5, 0.5, 2.0, 0.0)

    @pytest.mark.parametrize("bad", ["abc", "", None, "nan", "inf", True])
    def test_non_numeric_price(self, bad):
        record = [BASE_TIME_MS, "1", "2", "0.5", bad, "10"]
        with pytest.raises(MalformedRecord) as exc:
            normalize_record(record, index=7)
        assert exc.value.index == 7
        assert exc.value.field == "close"

    def test_short_record(self):
        with pytest.raises(MalformedRecord):
            normalize_record([BASE_TIME_MS, "1", "2", "0.5", "1"])

    def test_not_a_sequence(self):
        with pytest.raises(MalformedRecord):
            normalize_record({"open": 1})

    def test_bad_open_time(self):
        with pytest.raises(MalformedRecord) as exc:
            normalize_record(["yesterday", "1", "2", "0.5", "1", "10"])
        assert exc.value.field == "time"


class TestNormalizeKlines:
    def test_preserves_order_and_count(self):
        raw = make_klines([1.0, 2.0, 3.0])
        series = normalize_klines(raw)

        assert isinstance(series, CandleSeries)
        assert len(series) == 3
        assert series.closes == (1.0, 2.0, 3.0)
        assert series.times == tuple((BASE_TIME_MS + i * HOUR_MS) // 1000 for i in range(3))

    def test_empty(self):
        assert normalize_klines([]).is_empty()

    def test_one_bad_record_fails_the_whole_series(self):
        raw = make_klines([1.0, 2.0, 3.0])
        raw[1][4] = "oops"
        with pytest.raises(MalformedRecord) as exc:
            normalize_klines(raw)
        assert exc.value.index == 1

    def test_duplicate_time_rejected(self):
        raw = [make_kline(BASE_TIME_MS, 1.0), make_kline(BASE_TIME_MS, 2.0)]
        with pytest.raises(MalformedRecord):
            normalize_klines(raw)

    def test_out_of_order_rejected(self):
        raw = [make_kline(BASE_TIME_MS + HOUR_MS, 1.0), make_kline(BASE_TIME_MS, 2.0)]
        with pytest.raises(MalformedRecord):
            normalize_klines(raw)

    def test_inconsistent_high_low_is_kept(self):
        record = [BASE_TIME_MS, "10", "9", "8", "10", "1"]
        series = normalize_klines([record])
        assert series[0].high == 9.0


class TestSeriesToFrame:
    def test_columns_and_index(self):
        df = series_to_frame(normalize_klines(make_klines([1.0, 2.0])))

        assert list(df.columns) == ["Open", "High", "Low", "Close", "Volume"]
        assert df.index.name == "Timestamp"
        assert str(df.index.tz) == "UTC"
        assert df["Close"].tolist() == [1.0, 2.0]

    def test_empty(self):
        assert series_to_frame(CandleSeries()).empty
