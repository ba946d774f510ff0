"""Default values for the PACMEG package."""

import numpy as np


class _Precision:
    """Class specifying precision of the comodulograms.

    Double precision (float64) used by default.
    """

    def __init__(self) -> None:  # noqa: D107
        self.type = "double"
        self.real = np.float64

    def set_precision(self, precision: str) -> None:
        """Set precision of the comodulograms.

        Parameters
        ----------
        precision : str
            Precision of the results. Must be one of "single" or "double".
        """
        if precision not in ["single", "double"]:
            raise ValueError("precision must be either 'single' or 'double'.")

        self.type = precision
        self.real = np.float32 if precision == "single" else np.float64


_precision = _Precision()


# Configuration defaults
_DEFAULT_FILT_ORDER = 4
_DEFAULT_AMP_BANDW_METHOD = "maxphase"
_DEFAULT_AMP_BANDW = 10
_DEFAULT_METHOD = "tort"
_DEFAULT_SURR_N = 200

# Half-width (in Hz) of the passband around each phase frequency
_PHASE_HALF_BANDWIDTH = 1

# Number of phase bins of the Tort modulation index
_N_PHASE_BINS = 18

# Phase frequencies below this (in Hz) should use a filter order <= 3
_LOW_PHASE_FREQ = 7
_LOW_PHASE_MAX_FILT_ORDER = 3
