"""Default configuration. Override with INVESTSIM_* environment variables."""

from investsim.core.formatting import DEFAULT_CURRENCY, DEFAULT_LOCALE
from investsim.core.projection import DEFAULT_ASSUMED_INFLATION_PERCENT, DEFAULT_BASE_YEAR


class Config:
    # front-end dev servers allowed to call /api/*
    CORS_ORIGINS = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]
    LOG_LEVEL = "INFO"

    DISPLAY_LOCALE = DEFAULT_LOCALE
    DISPLAY_CURRENCY = DEFAULT_CURRENCY
    LABEL_BASE_YEAR = DEFAULT_BASE_YEAR
    ASSUMED_INFLATION_PERCENT = DEFAULT_ASSUMED_INFLATION_PERCENT

    DEFAULT_PARAMETERS = {
        "initialCapital": 1000,
        "monthlyContribution": 200,
        "years": 10,
        "annualPercent": 8,
    }
