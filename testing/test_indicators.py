"""
Tests for the indicator engine (SMA, EMA, RSI, MACD, Bollinger Bands).

Usage:
    pytest testing/test_indicators.py -v
"""

import pytest

from conftest import make_series, wavy_closes
from core.indicators import bollinger_bands, compute_indicators, ema, macd, rsi, sma
from core.models import IndicatorConfig
from core.normalizer import normalize_klines


# ── SMA ──────────────────────────────────────────────────────────────────────


class TestSma:
    @pytest.mark.parametrize("n,period", [(1, 1), (20, 20), (21, 20), (50, 7), (300, 20)])
    def test_length_and_first_value(self, n, period):
        closes = wavy_closes(n)
        series = make_series(closes)
        result = sma(series, period)

        assert len(result) == n - period + 1
        assert result[0].value == sum(closes[:period]) / period
        assert result[0].time == series[period - 1].time

    def test_short_series_is_empty(self):
        assert sma(make_series([1.0, 2.0, 3.0]), 5) == ()

    def test_empty_series(self):
        assert sma(make_series([]), 20) == ()

    def test_rejects_non_positive_period(self):
        with pytest.raises(ValueError):
            sma(make_series([1.0, 2.0]), 0)


# ── EMA ──────────────────────────────────────────────────────────────────────


class TestEma:
    @pytest.mark.parametrize("period", [1, 2, 9, 12, 26, 200])
    def test_seeded_with_first_value(self, period):
        assert ema([42.5], period) == [42.5]

    def test_one_output_per_input(self):
        assert len(ema(wavy_closes(50), 12)) == 50

    def test_recurrence(self):
        values = [10.0, 11.0, 12.0]
        k = 2.0 / (3 + 1)
        expected_1 = 11.0 * k + 10.0 * (1 - k)
        expected_2 = 12.0 * k + expected_1 * (1 - k)
        assert ema(values, 3) == [10.0, expected_1, expected_2]

    def test_empty(self):
        assert ema([], 12) == []


# ── RSI ──────────────────────────────────────────────────────────────────────


class TestRsi:
    def test_length(self):
        series = make_series(wavy_closes(100))
        assert len(rsi(series, 14)) == 86

    @pytest.mark.parametrize("n", [0, 1, 13, 14])
    def test_needs_more_than_period_candles(self, n):
        assert rsi(make_series(wavy_closes(n)), 14) == ()

    def test_bounds(self):
        for n in (15, 60, 300):
            for point in rsi(make_series(wavy_closes(n)), 14):
                assert 0.0 <= point.value <= 100.0

    def test_strictly_rising_closes_read_100(self, rising_series):
        result = rsi(rising_series, 14)
        assert result
        assert all(p.value == 100.0 for p in result)

    def test_strictly_falling_closes_read_0(self):
        result = rsi(make_series([200.0 - i for i in range(30)]), 14)
        assert all(p.value == 0.0 for p in result)

    def test_first_point_at_index_period(self):
        series = make_series(wavy_closes(40))
        assert rsi(series, 14)[0].time == series[14].time


# ── MACD ─────────────────────────────────────────────────────────────────────


class TestMacd:
    def test_lines_share_timestamps_and_histogram_is_difference(self):
        result = macd(make_series(wavy_closes(120)))

        assert len(result.macd_line) == len(result.signal_line) == len(result.histogram) > 0
        for m, s, h in zip(result.macd_line, result.signal_line, result.histogram):
            assert h.time == m.time == s.time
            assert h.value == m.value - s.value

    def test_shorter_than_slow_is_empty(self):
        result = macd(make_series(wavy_closes(25)))
        assert len(result) == 0
        assert result.macd_line == result.signal_line == result.histogram == ()

    def test_covers_whole_series_once_slow_is_reached(self):
        series = make_series(wavy_closes(26))
        result = macd(series)
        assert len(result) == 26
        assert result.histogram[-1].time == series[-1].time

    def test_histogram_colors(self):
        for point in macd(make_series(wavy_closes(80))).points():
            expected = "rgba(0, 150, 136, 0.5)" if point.histogram >= 0 else "rgba(255, 82, 82, 0.5)"
            assert point.histogram_color == expected


# ── Bollinger Bands ──────────────────────────────────────────────────────────


class TestBollinger:
    def test_band_ordering(self):
        series = make_series(wavy_closes(120))
        for point in bollinger_bands(series, 20, 2.0):
            assert point.lower < point.middle < point.upper

    def test_flat_window_collapses_bands(self):
        closes = wavy_closes(20) + [500.0] * 20
        result = bollinger_bands(make_series(closes), 20, 2.0)
        last = result[-1]
        assert last.lower == last.middle == last.upper == 500.0

    @pytest.mark.parametrize("price", [0.1, 1.1, 30000.1])
    def test_flat_window_inexact_price(self, price):
        series = make_series([price] * 25)
        for point in bollinger_bands(series, 20, 2.0):
            assert point.lower == point.middle == point.upper == price
        assert [p.value for p in sma(series, 20)] == [price] * 6

    def test_middle_matches_sma(self):
        series = make_series(wavy_closes(60))
        bands = bollinger_bands(series, 20, 2.0)
        averages = sma(series, 20)
        assert [b.middle for b in bands] == [a.value for a in averages]

    def test_short_series_is_empty(self):
        assert bollinger_bands(make_series(wavy_closes(19)), 20) == ()


# ── Cross-cutting invariants ─────────────────────────────────────────────────


class TestInvariants:
    def test_every_output_time_exists_in_source(self):
        series = make_series(wavy_closes(150))
        times = series.time_set
        result = compute_indicators(series)

        for points in (result.sma, result.rsi, result.bollinger,
                       result.macd.macd_line, result.macd.signal_line, result.macd.histogram):
            assert all(p.time in times for p in points)

    def test_idempotent(self):
        series = make_series(wavy_closes(150))
        assert sma(series, 20) == sma(series, 20)
        assert rsi(series, 14) == rsi(series, 14)
        assert macd(series) == macd(series)
        assert bollinger_bands(series) == bollinger_bands(series)
        assert compute_indicators(series) == compute_indicators(series)

    def test_disabled_indicators_are_none(self):
        result = compute_indicators(make_series(wavy_closes(50)), IndicatorConfig.from_selection("rsi"))
        assert result.rsi is not None
        assert result.sma is None and result.macd is None and result.bollinger is None


# ── End-to-end scenarios ─────────────────────────────────────────────────────


class TestScenarios:
    def test_constant_close_30_candles(self, flat_series):
        result = compute_indicators(flat_series)

        assert len(result.sma) == 11
        assert all(p.value == 100.0 for p in result.sma)

        assert len(result.bollinger) == 11
        for p in result.bollinger:
            assert p.upper == p.middle == p.lower == 100.0

        # All deltas are zero: no losses, so RSI reads 100.
        assert len(result.rsi) == 16
        assert all(p.value == 100.0 for p in result.rsi)

    def test_300_candles_through_normalizer(self, klines_300):
        series = normalize_klines(klines_300)
        result = compute_indicators(series)

        assert len(result.sma) == 281
        assert len(result.rsi) == 286
        assert len(result.bollinger) == 281
        assert len(result.macd.macd_line) == len(result.macd.signal_line) == len(result.macd.histogram) > 0
        for m, s, h in zip(result.macd.macd_line, result.macd.signal_line, result.macd.histogram):
            assert m.time == s.time == h.time

    def test_computation_order_does_not_matter(self, klines_300):
        series = normalize_klines(klines_300)

        forward = (sma(series), rsi(series), macd(series), bollinger_bands(series))
        backward_b = bollinger_bands(series)
        backward_m = macd(series)
        backward_r = rsi(series)
        backward_s = sma(series)

        assert forward == (backward_s, backward_r, backward_m, backward_b)
