"""Domain models package."""
from product_manager.models.product import Category, Product, ProductDraft

__all__ = ["Category", "Product", "ProductDraft"]
