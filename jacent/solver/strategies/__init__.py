"""
Strategies Package - Concrete search implementations.

Import this module to register all built-in strategies.
"""

from .depth_first import DepthFirstStrategy
from .breadth_first import BreadthFirstStrategy

__all__ = [
    "DepthFirstStrategy",
    "BreadthFirstStrategy",
]
