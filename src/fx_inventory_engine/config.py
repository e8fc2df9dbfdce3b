# src/fx_inventory_engine/config.py
import os
from dotenv import load_dotenv

# Load environment variables from a .env file for local development.
load_dotenv()


# Ledger semantics
TRADING_CATEGORY = os.getenv("TRADING_CATEGORY", "TRANSACCIONES")
DEFAULT_VALUATION_CURRENCY = os.getenv("DEFAULT_VALUATION_CURRENCY", "PESO")
DECIMAL_PRECISION = int(os.getenv("DECIMAL_PRECISION", "28"))

# Logging
SERVICE_NAME = os.getenv("SERVICE_NAME", "fx-inventory-engine")
ENVIRONMENT = os.getenv("ENVIRONMENT", "local")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
