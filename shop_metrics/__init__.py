"""
Shop Metrics - reportes de ventas, margen y colecciones para tiendas Shopify.

Obtiene órdenes, productos e inventario desde la API REST de Shopify y
los agrega para un rango de fechas.
"""

__version__ = "0.1.0"
