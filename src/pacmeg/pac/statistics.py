"""Statistics for quantifying the strength of phase-amplitude coupling."""

from abc import ABC, abstractmethod
from itertools import product

import numpy as np
import scipy as sp
from numba import njit

from pacmeg.filt import AnalyticSignal, HilbertTransform
from pacmeg.utils._defaults import _N_PHASE_BINS, _precision


class CouplingStatistic(ABC):
    """Base class for PAC statistics computed from a phase and amplitude series."""

    name: str = None

    @abstractmethod
    def compute(self, phase: np.ndarray, amplitude: np.ndarray) -> float:
        """Compute the coupling strength between a phase and amplitude series.

        Parameters
        ----------
        phase : ~numpy.ndarray, shape of [times]
            Instantaneous phase (in radians) of the low-frequency band.

        amplitude : ~numpy.ndarray, shape of [times]
            Instantaneous amplitude envelope of the high-frequency band.

        Returns
        -------
        coupling : float
            Strength of the coupling.
        """

    def __repr__(self) -> str:
        """Return printable representation of the object."""
        return f"<CouplingStatistic: {self.name}>"


class TortMI(CouplingStatistic):
    """Modulation index of :footcite:`Tort2010`.

    Phases are split into equal-width bins, the mean amplitude in each bin is
    normalised to a distribution, and its Kullback-Leibler divergence from the uniform
    distribution is normalised by ``log(n_bins)``, giving values in the range
    :math:`[0, 1]`.

    Parameters
    ----------
    n_bins : int (default ``18``)
        Number of phase bins.
    """

    name = "tort"

    def __init__(self, n_bins: int = _N_PHASE_BINS) -> None:  # noqa: D107
        self.n_bins = n_bins

    def compute(self, phase: np.ndarray, amplitude: np.ndarray) -> float:
        return float(
            _compute_tort(
                np.asarray(phase, dtype=np.float64),
                np.asarray(amplitude, dtype=np.float64),
                self.n_bins,
            )
        )


class OzkurtMI(CouplingStatistic):
    """Normalised mean vector length :footcite:`Ozkurt2012`.

    NaN if the mean amplitude is zero.
    """

    name = "ozkurt"

    def compute(self, phase: np.ndarray, amplitude: np.ndarray) -> float:
        return float(
            _compute_ozkurt(
                np.asarray(phase, dtype=np.float64),
                np.asarray(amplitude, dtype=np.float64),
            )
        )


class PhaseLockingValue(CouplingStatistic):
    """Phase-locking value between the phase and the amplitude envelope's phase.

    The phase of the amplitude envelope is taken from the analytic signal of the
    detrended envelope :footcite:`Cohen2008`.

    Parameters
    ----------
    analytic : ~pacmeg.filt.AnalyticSignal | None (default None)
        Extractor for the envelope's phase. If :obj:`None`,
        :class:`~pacmeg.filt.HilbertTransform` is used.
    """

    name = "plv"

    def __init__(self, analytic: AnalyticSignal | None = None) -> None:  # noqa: D107
        self.analytic = analytic if analytic is not None else HilbertTransform()

    def compute(self, phase: np.ndarray, amplitude: np.ndarray) -> float:
        amp_phase = self.analytic.compute_phase(sp.signal.detrend(amplitude))
        return float(
            _compute_plv(
                np.asarray(phase, dtype=np.float64),
                np.asarray(amp_phase, dtype=np.float64),
            )
        )


class CanoltyMI(CouplingStatistic):
    """Raw (unnormalised) mean vector length :footcite:`Canolty2006`."""

    name = "canolty"

    def compute(self, phase: np.ndarray, amplitude: np.ndarray) -> float:
        return float(
            _compute_mvl(
                np.asarray(phase, dtype=np.float64),
                np.asarray(amplitude, dtype=np.float64),
            )
        )


STATISTICS = {
    statistic.name: statistic
    for statistic in (TortMI, OzkurtMI, PhaseLockingValue, CanoltyMI)
}


def compute_comodulogram(
    phase_series: np.ndarray,
    amp_series: np.ndarray,
    statistic: CouplingStatistic,
    precision: type | None = None,
) -> np.ndarray:
    """Compute the coupling strength for every phase-amplitude band pair.

    Parameters
    ----------
    phase_series : ~numpy.ndarray, shape of [phase bands, times]
        Instantaneous phase of each phase band.

    amp_series : ~numpy.ndarray, shape of [amplitude bands, times]
        Instantaneous amplitude of each amplitude band.

    statistic : ~pacmeg.pac.CouplingStatistic
        Statistic to quantify coupling with.

    precision : type | None (default None)
        Data type of the results. If :obj:`None`, the package precision is used.

    Returns
    -------
    comodulogram : ~numpy.ndarray, shape of [amplitude bands, phase bands]
        Coupling strength of each band pair.
    """
    if phase_series.shape[1] != amp_series.shape[1]:
        raise ValueError(
            "`phase_series` and `amp_series` must have the same number of timepoints."
        )
    if precision is None:
        precision = _precision.real

    n_amps, n_phases = amp_series.shape[0], phase_series.shape[0]
    comodulogram = np.zeros((n_amps, n_phases), dtype=precision)
    for amp_i, phase_i in product(range(n_amps), range(n_phases)):
        comodulogram[amp_i, phase_i] = statistic.compute(
            phase_series[phase_i], amp_series[amp_i]
        )

    return comodulogram


@njit
def _compute_tort(
    phase: np.ndarray, amplitude: np.ndarray, n_bins: int
) -> float:  # pragma: no cover
    """Compute the Tort modulation index.

    Parameters
    ----------
    phase : numpy.ndarray of float, shape of [times]
        Phases in the range (-pi, pi].

    amplitude : numpy.ndarray of float, shape of [times]
        Non-negative amplitudes.

    n_bins : int
        Number of phase bins.

    Returns
    -------
    mi : float
        Modulation index. NaN if all amplitudes are zero.

    Notes
    -----
    Empty bins contribute zero probability. No checks on the inputs are performed for
    speed.
    """
    bin_width = 2 * np.pi / n_bins
    amp_sums = np.zeros(n_bins)
    counts = np.zeros(n_bins)
    for idx in range(phase.shape[0]):
        bin_i = int(np.floor((phase[idx] + np.pi) / bin_width))
        if bin_i < 0:
            bin_i = 0
        elif bin_i >= n_bins:
            bin_i = n_bins - 1  # phase of exactly pi
        amp_sums[bin_i] += amplitude[idx]
        counts[bin_i] += 1

    mean_amps = np.zeros(n_bins)
    for bin_i in range(n_bins):
        if counts[bin_i] > 0:
            mean_amps[bin_i] = amp_sums[bin_i] / counts[bin_i]
    total = mean_amps.sum()
    if total <= 0:
        return np.nan

    entropy = 0.0
    for bin_i in range(n_bins):
        prob = mean_amps[bin_i] / total
        if prob > 0:
            entropy -= prob * np.log(prob)
    max_entropy = np.log(n_bins)

    return (max_entropy - entropy) / max_entropy


@njit
def _compute_mvl(phase: np.ndarray, amplitude: np.ndarray) -> float:  # pragma: no cover
    """Compute the mean vector length of amplitudes at their phases."""
    return np.abs(np.mean(amplitude * np.exp(1j * phase)))


@njit
def _compute_ozkurt(
    phase: np.ndarray, amplitude: np.ndarray
) -> float:  # pragma: no cover
    """Compute the mean vector length normalised by mean amplitude and length.

    NaN if the mean amplitude is not positive.
    """
    mean_amp = np.mean(amplitude)
    if mean_amp <= 0:
        return np.nan
    return _compute_mvl(phase, amplitude) / (mean_amp * np.sqrt(phase.shape[0]))


@njit
def _compute_plv(phase: np.ndarray, amp_phase: np.ndarray) -> float:  # pragma: no cover
    """Compute the phase-locking value between two phase series."""
    return np.abs(np.mean(np.exp(1j * (phase - amp_phase))))
