"""
Type definitions used across layers
"""

from enum import StrEnum


# --- The board needs two more owner options (empty + blocked). Those live in src/dots/cell.py as Owner.
# --- NOTE For now, conversions between the two go through Owner.from_color / Owner.color


class PlayerColor(StrEnum):
    RED = "red"
    BLUE = "blue"
