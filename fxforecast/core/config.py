"""
Engine Configuration

All settings loaded from environment variables (prefix FXFORECAST_).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Engine settings from environment variables."""

    # Application
    app_name: str = "FX Forecast Engine"
    app_version: str = "0.1.0"

    # Indicator periods
    rsi_period: int = 14
    rsi_overbought: float = 70.0
    rsi_oversold: float = 30.0
    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal_period: int = 9
    macd_signal_mode: str = "scaled"  # Options: scaled, ema
    macd_signal_scale: float = 0.9
    bollinger_period: int = 20
    bollinger_std_dev: float = 2.0
    bollinger_upper_zone: float = 0.8
    bollinger_lower_zone: float = 0.2
    sma_period: int = 20
    ema_period: int = 20
    volume_window: int = 20
    momentum_lookback: int = 10
    momentum_strong_threshold: float = 0.02
    volatility_window: int = 20

    # Pattern detection
    head_shoulders_bars: int = 20
    head_shoulders_tolerance: float = 0.005
    double_pattern_bars: int = 15
    double_pattern_tolerance: float = 0.002
    fibonacci_bars: int = 50
    support_resistance_bars: int = 30
    support_resistance_tolerance: float = 0.001
    detect_support_resistance: bool = True

    # Forecast scoring
    sentiment_weight: float = 0.3
    technical_weight: float = 0.4
    pattern_weight: float = 0.3
    feature_window: int = 20
    min_forecast_bars: int = 20
    default_horizon_hours: float = 24.0
    directional_pattern_score: bool = False

    # Aggregate analysis
    min_analysis_bars: int = 20
    macd_strong_threshold: float = 0.001
    strong_pattern_confidence: float = 0.7
    max_analysis_confidence: float = 0.9

    # Prediction cache policy
    prediction_cache_ttl_seconds: float = 180.0
    prediction_cache_price_tolerance: float = 0.001

    class Config:
        env_prefix = "FXFORECAST_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

