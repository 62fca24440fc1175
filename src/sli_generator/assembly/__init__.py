from .builders import build_order_input, build_standalone_input
from .repository import JsonSliRepository, SliRepository

__all__ = ["JsonSliRepository", "SliRepository", "build_order_input", "build_standalone_input"]
