"""
Domain layer for the store metrics service.

This layer contains the read-only Shopify entities the reports consume,
the report records they produce, and the query value objects.
"""
