"""
Domain models for business entities.

Input entities are parsed from Shopify REST payloads; report models are
derived output recomputed on every call.
"""

from .order import LineItem, Order, Refund, Transaction
from .product import InventoryItem, Product
from .report import CollectionStat, FinancialSummary, ProductStat

__all__ = [
    "Order",
    "LineItem",
    "Refund",
    "Transaction",
    "Product",
    "InventoryItem",
    "FinancialSummary",
    "ProductStat",
    "CollectionStat",
]
