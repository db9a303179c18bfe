"""
Pump liquidator package initializer.

This package exposes the primary function ``scan_and_sell`` and the
``LiquidatorContext`` it runs against.  Individual pipeline steps should be
imported explicitly from their respective modules.
"""

from .context import LiquidatorContext  # noqa: F401
from .liquidator import scan_and_sell  # noqa: F401

__all__ = ["LiquidatorContext", "scan_and_sell"]
