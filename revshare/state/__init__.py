"""
State tables for revshare: ids, funds and the debt side-table
"""

from .debts import DebtTable
from .funds import Funds
from .ids import IdAllocator

__all__ = [
    "DebtTable",
    "Funds",
    "IdAllocator",
]
