"""Data source loaders for the fill-in planner."""

from .blocks import BlockConfig, StatusConfig
from .loader import DataLoader
from .records import read_records
from .roster import RosterConfig
from .slots import SlotConfig

__all__ = [
    "DataLoader",
    "RosterConfig",
    "SlotConfig",
    "BlockConfig",
    "StatusConfig",
    "read_records",
]
