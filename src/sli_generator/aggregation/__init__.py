from .products import aggregate_products

__all__ = ["aggregate_products"]
