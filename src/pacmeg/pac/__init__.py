"""Tools for computing phase-amplitude coupling."""

from .statistics import (
    STATISTICS,
    CanoltyMI,
    CouplingStatistic,
    OzkurtMI,
    PhaseLockingValue,
    TortMI,
    compute_comodulogram,
)
from .surrogates import compute_surrogates, draw_cut_points, rotate, swap_blocks
from .config import PACConfig
from .pac import PAC, compute_pac
