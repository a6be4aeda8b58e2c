from django.db import models

LOW_STOCK_THRESHOLD = 5


class StockStatus(models.TextChoices):
    IN_STOCK = "in-stock", "In stock"
    LOW_STOCK = "low-stock", "Low stock"
    OUT_OF_STOCK = "out-of-stock", "Out of Stock"


def stock_status(product):
    if product.stock <= 0:
        return StockStatus.OUT_OF_STOCK
    if product.stock <= LOW_STOCK_THRESHOLD:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


def stock_label(product):
    """Badge text shown on product cards."""
    status = stock_status(product)
    if status == StockStatus.LOW_STOCK:
        return f"Only {product.stock} left"
    if status == StockStatus.OUT_OF_STOCK:
        return StockStatus.OUT_OF_STOCK.label
    return f"{product.stock} in stock"
