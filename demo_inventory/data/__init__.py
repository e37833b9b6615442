"""
Demo Data Module
"""
from .generators import CatalogGenerator

__all__ = [
    "CatalogGenerator",
]
