"""Tools for band-pass filtering data and extracting phase and amplitude."""

from abc import ABC, abstractmethod

import numpy as np
import scipy as sp

from pacmeg.filt.bands import FrequencyBand
from pacmeg.utils.errors import FilterError


_LOWER_ORDER_MSG = "Perhaps try a lower filter order."


class BandPassFilter(ABC):
    """Base class for band-pass filters used to isolate frequency bands."""

    @abstractmethod
    def apply(
        self,
        data: np.ndarray,
        sampling_freq: int | float,
        low: float,
        high: float,
        order: int,
    ) -> np.ndarray:
        """Band-pass filter data.

        Parameters
        ----------
        data : ~numpy.ndarray, shape of [times]
            Real-valued timeseries to filter.

        sampling_freq : int | float
            Sampling frequency (in Hz) of ``data``.

        low, high : float
            Lower and upper edges (in Hz) of the passband, respectively.

        order : int
            Order of the filter.

        Returns
        -------
        filtered : ~numpy.ndarray, shape of [times]
            The filtered timeseries.

        Raises
        ------
        FilterError
            If the filter cannot be designed or applied.
        """


class ButterworthFilter(BandPassFilter):
    """Zero-phase Butterworth band-pass filter.

    The filter is applied forwards and backwards (:func:`scipy.signal.sosfiltfilt`),
    so the effective order is double that requested and no phase shift is introduced.
    Second-order sections are used to keep narrow passbands numerically stable.
    """

    def apply(
        self,
        data: np.ndarray,
        sampling_freq: int | float,
        low: float,
        high: float,
        order: int,
    ) -> np.ndarray:
        try:
            sos = sp.signal.butter(
                order, [low, high], btype="bandpass", output="sos", fs=sampling_freq
            )
        except ValueError as error:
            raise FilterError(
                f"Could not design a filter for the {low:g}-{high:g} Hz band ({error}). "
                f"{_LOWER_ORDER_MSG}"
            ) from error

        poles = sp.signal.sos2zpk(sos)[1]
        if np.any(np.abs(poles) >= 1):
            raise FilterError(
                f"The filter for the {low:g}-{high:g} Hz band is unstable. "
                f"{_LOWER_ORDER_MSG}"
            )

        try:
            filtered = sp.signal.sosfiltfilt(sos, data)
        except ValueError as error:
            raise FilterError(
                f"Could not filter the {low:g}-{high:g} Hz band ({error}). "
                f"{_LOWER_ORDER_MSG}"
            ) from error

        if not np.all(np.isfinite(filtered)):
            raise FilterError(
                f"Filtering the {low:g}-{high:g} Hz band produced non-finite values. "
                f"{_LOWER_ORDER_MSG}"
            )

        return filtered


class AnalyticSignal(ABC):
    """Base class for extracting instantaneous phase and amplitude."""

    @abstractmethod
    def compute(self, data: np.ndarray) -> np.ndarray:
        """Compute the complex-valued analytic signal of real-valued data."""

    def compute_phase(self, data: np.ndarray) -> np.ndarray:
        """Compute the instantaneous phase (in radians, range (-pi, pi])."""
        return np.angle(self.compute(data))

    def compute_amplitude(self, data: np.ndarray) -> np.ndarray:
        """Compute the instantaneous amplitude envelope."""
        return np.abs(self.compute(data))


class HilbertTransform(AnalyticSignal):
    """Analytic signal computed with the Hilbert transform."""

    def compute(self, data: np.ndarray) -> np.ndarray:
        return sp.signal.hilbert(data)


def filter_bands(
    data: np.ndarray,
    sampling_freq: int | float,
    bands: list[FrequencyBand],
    filt_order: int,
    band_filter: BandPassFilter | None = None,
    analytic: AnalyticSignal | None = None,
) -> np.ndarray:
    """Filter data into bands and extract the phase or amplitude of each band.

    Parameters
    ----------
    data : ~numpy.ndarray, shape of [times]
        Real-valued timeseries.

    sampling_freq : int | float
        Sampling frequency (in Hz) of ``data``.

    bands : list of ~pacmeg.filt.FrequencyBand
        Bands to filter the data into. All bands must share the same role.

    filt_order : int
        Order of the filter.

    band_filter : ~pacmeg.filt.BandPassFilter | None (default None)
        Filter to use. If :obj:`None`, :class:`~pacmeg.filt.ButterworthFilter` is
        used.

    analytic : ~pacmeg.filt.AnalyticSignal | None (default None)
        Analytic signal extractor to use. If :obj:`None`,
        :class:`~pacmeg.filt.HilbertTransform` is used.

    Returns
    -------
    filtered : ~numpy.ndarray of float, shape of [bands, times]
        Instantaneous phase (for phase bands) or amplitude (for amplitude bands) of
        the filtered data.
    """
    if band_filter is None:
        band_filter = ButterworthFilter()
    if analytic is None:
        analytic = HilbertTransform()

    roles = {band.role for band in bands}
    if len(roles) != 1:
        raise ValueError("All entries of `bands` must have the same role.")
    role = roles.pop()
    if role == "phase":
        extract = analytic.compute_phase
    elif role == "amplitude":
        extract = analytic.compute_amplitude
    else:
        raise ValueError("The role of `bands` is not recognised.")

    filtered = np.zeros((len(bands), data.shape[0]), dtype=np.float64)
    for band_i, band in enumerate(bands):
        filtered[band_i] = extract(
            band_filter.apply(data, sampling_freq, band.low, band.high, filt_order)
        )

    return filtered
