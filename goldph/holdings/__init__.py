"""
FIFO holdings для реверса ранее учтённой стоимости инвентаря.
"""

from goldph.holdings.fifo import Holdings

__all__ = ["Holdings"]
