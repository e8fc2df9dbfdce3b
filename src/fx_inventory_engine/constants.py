# src/fx_inventory_engine/constants.py

# --- Canonical record fields and the keys they may arrive under ---
# Order matters: the first key present in a raw record wins.
FIELD_ALIASES = {
    "transaction_id": ("transaction_id", "id", "_id"),
    "transaction_date": ("transaction_date", "date", "fecha"),
    "category": ("category", "operacion"),
    "kind": ("kind", "subOperacion"),
    "asset_currency": ("asset_currency", "assetCurrency", "moneda"),
    "asset_quantity": ("asset_quantity", "assetQuantity", "monto"),
    "valuation_currency": ("valuation_currency", "valuationCurrency", "monedaTC"),
    "total_value": ("total_value", "totalValue", "total"),
    "arbitrage_profit": ("arbitrage_profit", "arbitrageProfit", "profit", "comision"),
}

AMOUNT_FIELDS = ("asset_quantity", "total_value", "arbitrage_profit")

# --- Back-office operation codes ---
KIND_ALIASES = {
    "COMPRA": "BUY",
    "VENTA": "SELL",
    "ARBITRAJE": "ARBITRAGE",
}

UNKNOWN_ID_PREFIX = "UNKNOWN_ID"
UNKNOWN_CURRENCY = "UNK"
