"""
Herramientas financieras para la ficha de una propiedad.
"""

from nido.finance.mortgage import MortgageQuote, calculate_mortgage, quote_for_listing

__all__ = ["MortgageQuote", "calculate_mortgage", "quote_for_listing"]
