"""
Layout domain models package
"""

from .guest import Guest
from .table import Table, TableShape
from .statistics import LayoutStatistics

__all__ = ["Guest", "Table", "TableShape", "LayoutStatistics"]
