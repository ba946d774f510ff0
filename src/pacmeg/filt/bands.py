"""Tools for constructing phase and amplitude frequency bands."""

from abc import ABC, abstractmethod
from typing import NamedTuple

import numpy as np

from pacmeg.utils._defaults import _PHASE_HALF_BANDWIDTH
from pacmeg.utils._utils import _round_half_away
from pacmeg.utils.errors import DetectabilityError


_UNDETECTABLE_MSG = "You will not be able to detect PAC with this configuration."


class FrequencyBand(NamedTuple):
    """A frequency band used as a filter passband.

    Parameters
    ----------
    center : float
        Centre frequency (in Hz) of the band.

    low : float
        Lower edge (in Hz) of the passband.

    high : float
        Upper edge (in Hz) of the passband.

    role : ``"phase"`` | ``"amplitude"``
        Whether the filtered signal provides the phase or the amplitude for PAC.
    """

    center: float
    low: float
    high: float
    role: str

    @property
    def bandwidth(self) -> float:
        """Width (in Hz) of the passband."""
        return self.high - self.low


def get_phase_bands(phase_freqs: np.ndarray) -> list[FrequencyBand]:
    """Get the passbands of the phase frequencies.

    Parameters
    ----------
    phase_freqs : ~numpy.ndarray, shape of [phase frequencies]
        Centre frequencies (in Hz) of the phase bands.

    Returns
    -------
    bands : list of ~pacmeg.filt.FrequencyBand
        Bands of ``[freq - 1, freq + 1]`` Hz for each phase frequency.
    """
    return [
        FrequencyBand(
            center=float(freq),
            low=float(freq - _PHASE_HALF_BANDWIDTH),
            high=float(freq + _PHASE_HALF_BANDWIDTH),
            role="phase",
        )
        for freq in phase_freqs
    ]


class BandwidthPolicy(ABC):
    """Base class for choosing the passband of amplitude frequencies.

    Parameters
    ----------
    phase_freqs : ~numpy.ndarray, shape of [phase frequencies]
        Phase frequencies (in Hz) PAC is being computed for.

    amp_bandw : int | float
        Fixed half-bandwidth (in Hz). Only used by the ``"number"`` policy.
    """

    name: str = None

    def __init__(self, phase_freqs: np.ndarray, amp_bandw: int | float) -> None:
        self.max_phase_freq = float(np.max(phase_freqs))
        self.amp_bandw = amp_bandw

    @abstractmethod
    def compute_passband(self, center: int | float) -> tuple[float, float]:
        """Compute the lower and upper passband edges for an amplitude frequency."""

    @abstractmethod
    def check_detectable(self, amp_freqs: np.ndarray) -> None:
        """Check that PAC can be resolved for the amplitude frequencies.

        Raises
        ------
        DetectabilityError
            If the passbands are too narrow for PAC at the phase frequencies.
        """

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of the bandwidth."""

    def get_amp_bands(self, amp_freqs: np.ndarray) -> list[FrequencyBand]:
        """Get the passbands of the amplitude frequencies.

        Parameters
        ----------
        amp_freqs : ~numpy.ndarray, shape of [amplitude frequencies]
            Centre frequencies (in Hz) of the amplitude bands.

        Returns
        -------
        bands : list of ~pacmeg.filt.FrequencyBand
            Bands for each amplitude frequency, according to the policy.
        """
        bands = []
        for freq in amp_freqs:
            low, high = self.compute_passband(freq)
            bands.append(
                FrequencyBand(
                    center=float(freq), low=float(low), high=float(high),
                    role="amplitude",
                )
            )
        return bands


class NumberBandwidth(BandwidthPolicy):
    """Amplitude passbands of ``freq -/+ amp_bandw`` Hz."""

    name = "number"

    def compute_passband(self, center: int | float) -> tuple[float, float]:
        return center - self.amp_bandw, center + self.amp_bandw

    def check_detectable(self, amp_freqs: np.ndarray) -> None:
        if self.amp_bandw < self.max_phase_freq:
            raise DetectabilityError(
                f"{_UNDETECTABLE_MSG} Reduce the phase to {self.amp_bandw:g}Hz, or "
                "increase the amplitude bandwidth to "
                f"{self.max_phase_freq + 1:g}Hz."
            )

    @property
    def description(self) -> str:
        return f"Bandwidth = {self.amp_bandw:.1f}Hz"


class MaxPhaseBandwidth(BandwidthPolicy):
    """Amplitude passbands of ``freq -/+ 1.5 * max(phase_freqs)`` Hz."""

    name = "maxphase"
    _factor = 1.5

    def compute_passband(self, center: int | float) -> tuple[float, float]:
        half_width = self._factor * self.max_phase_freq
        return center - half_width, center + half_width

    def check_detectable(self, amp_freqs: np.ndarray) -> None:
        min_amp_freq = float(np.min(amp_freqs))
        if min_amp_freq - self._factor * self.max_phase_freq < self.max_phase_freq:
            raise DetectabilityError(
                f"{_UNDETECTABLE_MSG} Reduce the phase to "
                f"{min_amp_freq / (self._factor + 1):g}Hz, or increase the lowest "
                "amplitude frequency to "
                f"{(self._factor + 1) * self.max_phase_freq:g}Hz."
            )

    @property
    def description(self) -> str:
        return f"Bandwidth = {self._factor * self.max_phase_freq:.1f}Hz"


class CentreFreqBandwidth(BandwidthPolicy):
    """Amplitude passbands of ``round(freq -/+ freq / 2.5)`` Hz."""

    name = "centre_freq"
    _divisor = 2.5

    def compute_passband(self, center: int | float) -> tuple[float, float]:
        half_width = center / self._divisor
        return (
            float(_round_half_away(center - half_width)),
            float(_round_half_away(center + half_width)),
        )

    def check_detectable(self, amp_freqs: np.ndarray) -> None:
        min_amp_freq = float(np.min(amp_freqs))
        if min_amp_freq / self._divisor < self.max_phase_freq:
            valid_amp_freqs = amp_freqs[amp_freqs / self._divisor >= self.max_phase_freq]
            low_amp = f"{valid_amp_freqs.min():g}" if valid_amp_freqs.size else "?"
            raise DetectabilityError(
                f"{_UNDETECTABLE_MSG} Reduce the phase to "
                f"{min_amp_freq / self._divisor:g}Hz, or increase the amplitude to "
                f"{low_amp}Hz."
            )

    @property
    def description(self) -> str:
        return f"Bandwidth = centre amplitude frequency / {self._divisor}"


BANDWIDTH_POLICIES = {
    policy.name: policy
    for policy in (NumberBandwidth, MaxPhaseBandwidth, CentreFreqBandwidth)
}
