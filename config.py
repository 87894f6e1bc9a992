"""Process-wide settings, read once at import and never mutated."""
from enum import Enum


class DisplayMode(Enum):
    MIXED = "mixed"        # 1+1/2
    IMPROPER = "improper"  # 3/2


# Fixed integer width for numerators and denominators (numpy dtype name)
INTEGER_CONFIG = {
    "dtype": "int32",
}

DISPLAY_CONFIG = {
    "mode": DisplayMode.MIXED,
    "pos_inf": "+inf",
    "neg_inf": "-inf",
}
