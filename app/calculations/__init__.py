"""
Investment Projection Engine

Pure calculation modules for the investment calculator: currency
conversion with denomination rounding, compound growth projections,
amount field handling and display formatting.
"""

from app.calculations import amount, currency, formatting, projection

__all__ = ["amount", "currency", "formatting", "projection"]
