"""
Unit tests for indicator calculations.
"""

import numpy as np
import pytest

from fxforecast.services.indicators.calculations import (
    sma,
    ema,
    rsi,
    macd,
    momentum,
    bollinger_bands,
    band_position,
    volatility,
    volume_profile,
    fibonacci_levels,
    range_extremes,
    get_last_valid,
    signal_from_threshold,
)


class TestMovingAverages:
    def test_ema_of_single_element_is_that_element(self):
        assert ema(np.array([1.2345]), 12)[-1] == 1.2345

    def test_ema_is_seeded_with_first_price(self):
        result = ema(np.array([1.0, 2.0, 3.0]), 3)
        # multiplier 0.5: 1.0 -> 1.5 -> 2.25
        assert result.tolist() == [1.0, 1.5, 2.25]

    def test_ema_rejects_non_positive_period(self):
        with pytest.raises(ValueError):
            ema(np.array([1.0, 2.0]), 0)

    def test_ema_empty_input(self):
        assert len(ema(np.array([]), 5)) == 0

    def test_sma_is_mean_of_trailing_window(self):
        result = sma(np.array([1.0, 2.0, 3.0, 4.0]), 2)
        assert np.isnan(result[0])
        assert result[1:].tolist() == [1.5, 2.5, 3.5]

    def test_sma_short_input_is_all_nan(self):
        assert np.all(np.isnan(sma(np.array([1.0, 2.0]), 5)))


class TestRSI:
    def test_too_short_is_undefined(self):
        assert get_last_valid(rsi(np.array([1.0] * 14), 14)) is None

    def test_exactly_period_plus_one_identical_closes_is_neutral(self):
        assert get_last_valid(rsi(np.array([1.1] * 15), 14)) == 50.0

    def test_all_gains_reads_100(self):
        closes = np.array([1.0 + i * 0.01 for i in range(15)])
        assert get_last_valid(rsi(closes, 14)) == 100.0

    def test_all_losses_reads_0(self):
        closes = np.array([2.0 - i * 0.01 for i in range(15)])
        assert get_last_valid(rsi(closes, 14)) == pytest.approx(0.0)

    def test_uses_simple_average_of_trailing_deltas(self):
        # gains [0.2, 0], losses [0, 0.1] -> rs = 2 -> rsi = 66.67
        value = get_last_valid(rsi(np.array([1.0, 1.2, 1.1]), 2))
        assert value == pytest.approx(100 - 100 / 3)

    def test_only_last_period_deltas_count(self):
        # An early crash followed by steady gains reads 100 once out of the window
        closes = np.array([2.0, 1.0] + [1.0 + i * 0.01 for i in range(1, 15)])
        assert get_last_valid(rsi(closes, 14)) == 100.0


class TestMACD:
    def test_scaled_signal_line(self):
        closes = np.array([1.0 + i * 0.001 for i in range(40)])
        line, signal, hist = macd(closes)
        assert signal[-1] == pytest.approx(line[-1] * 0.9)
        assert hist[-1] == pytest.approx(line[-1] * 0.1)
        assert line[-1] > 0

    def test_ema_signal_line(self):
        closes = np.array([1.0 + i * 0.001 for i in range(40)])
        line, signal, _ = macd(closes, signal_mode="ema")
        assert signal[-1] == pytest.approx(ema(line, 9)[-1])

    def test_unknown_signal_mode(self):
        with pytest.raises(ValueError):
            macd(np.array([1.0, 1.1]), signal_mode="wilder")

    def test_flat_series_is_zero(self):
        line, signal, hist = macd(np.array([1.2] * 30))
        assert line[-1] == 0.0
        assert hist[-1] == 0.0


class TestBollinger:
    def test_price_at_middle_is_exactly_half(self):
        assert band_position(1.1023, 1.1023, 1.1100, 1.0946) == 0.5

    def test_zero_width_bands_read_half(self):
        assert band_position(1.2, 1.2, 1.2, 1.2) == 0.5

    def test_position_is_clamped(self):
        assert band_position(2.0, 1.0, 1.1, 0.9) == 1.0
        assert band_position(0.1, 1.0, 1.1, 0.9) == 0.0

    def test_flat_series(self):
        upper, middle, lower, percent_b = bollinger_bands(np.array([1.2] * 25), 20)
        assert percent_b[-1] == 0.5
        assert np.isnan(percent_b[0])

    def test_bands_use_population_std(self):
        closes = np.array([1.0, 2.0, 3.0, 4.0])
        upper, middle, lower, _ = bollinger_bands(closes, 4, 2.0)
        std = np.sqrt(1.25)
        assert middle[-1] == 2.5
        assert upper[-1] == pytest.approx(2.5 + 2 * std)
        assert lower[-1] == pytest.approx(2.5 - 2 * std)


class TestMomentumVolatilityVolume:
    def test_momentum_compares_with_tenth_last_close(self):
        closes = np.array([1.0, 1.01, 1.02, 1.03, 1.04, 1.05, 1.06, 1.07, 1.08, 1.10])
        assert momentum(closes, 10)[-1] == pytest.approx(0.10)

    def test_momentum_short_input(self):
        assert get_last_valid(momentum(np.array([1.0] * 9), 10)) is None

    def test_flat_volatility_is_zero(self):
        assert volatility(np.array([1.2] * 20)) == 0.0

    def test_single_close_volatility_is_zero(self):
        assert volatility(np.array([1.2])) == 0.0

    def test_volatility_is_rms_of_log_returns(self):
        closes = np.array([1.0, np.e, 1.0])
        assert volatility(closes) == pytest.approx(100.0)

    def test_volume_profile(self):
        average, current, ratio = volume_profile(np.array([100.0, 100.0, 400.0]), 20)
        assert average == 200.0
        assert current == 400.0
        assert ratio == 2.0

    def test_zero_volume_ratio_is_one(self):
        assert volume_profile(np.array([0.0, 0.0]), 20)[2] == 1.0


class TestLevels:
    def test_fibonacci_levels(self):
        levels = fibonacci_levels(1.2, 1.0)
        assert levels["level_236"] == pytest.approx(1.0472)
        assert levels["level_382"] == pytest.approx(1.0764)
        assert levels["level_618"] == pytest.approx(1.1236)

    def test_range_extremes(self):
        support, resistance = range_extremes(
            np.array([9.0, 1.3, 1.2]), np.array([0.1, 1.0, 1.1]), 2
        )
        assert (support, resistance) == (1.0, 1.3)

    def test_signal_from_threshold(self):
        assert signal_from_threshold(75, 70, 30) == "SELL"
        assert signal_from_threshold(25, 70, 30) == "BUY"
        assert signal_from_threshold(70, 70, 30) == "NEUTRAL"
