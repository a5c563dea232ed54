"""
Database models.
Import all models here to ensure they're registered with Base.
"""

from fxdeals.models.fx_deal import FxDeal

__all__ = [
    "FxDeal",
]
