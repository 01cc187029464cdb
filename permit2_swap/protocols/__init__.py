"""
Aggregator integrations
"""

from .zeroex import ZeroExAPI

__all__ = ["ZeroExAPI"]
