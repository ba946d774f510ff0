"""Initialisation of the PACMEG package."""

__version__ = "1.0.0dev"

from .filt import ButterworthFilter, HilbertTransform
from .pac import PAC, PACConfig, compute_pac
from .utils import (
    ConfigError,
    ConfigWarning,
    DetectabilityError,
    FilterError,
    ResultsPAC,
    set_precision,
)
