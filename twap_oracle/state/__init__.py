"""
State for price-integral sources.
"""

from .pair import ConstantProductPair

__all__ = ["ConstantProductPair"]
