# src/fx_inventory_engine/exceptions.py

class InventoryEngineError(Exception):
    """Base exception for all inventory engine errors."""
    def __init__(self, message="An unspecified error occurred in the inventory engine."):
        self.message = message
        super().__init__(self.message)


class AmountParseError(InventoryEngineError):
    """Raised when a monetary amount or quantity cannot be read as a decimal."""
    def __init__(self, message="Amount could not be parsed as a decimal number."):
        self.message = message
        super().__init__(self.message)


class DateParseError(InventoryEngineError):
    """Raised when a transaction or query date cannot be read as a calendar date."""
    def __init__(self, message="Value could not be parsed as a calendar date."):
        self.message = message
        super().__init__(self.message)
