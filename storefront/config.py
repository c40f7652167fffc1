"""
Application configuration — loaded once at startup.
"""

import os

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./storefront.db")

SERVER_HOST = os.getenv("SERVER_HOST", "0.0.0.0")
SERVER_PORT = int(os.getenv("SERVER_PORT", "2022"))

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEBUG = os.getenv("DEBUG", "0") == "1"

# Currency columns keep two decimal places, like a numeric(10, 2) column.
CURRENCY_PLACES = 2
