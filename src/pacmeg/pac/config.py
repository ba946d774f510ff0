"""Configuration and validation of PAC analyses."""

from collections.abc import Mapping
from copy import deepcopy
from multiprocessing import cpu_count
from warnings import warn

import numpy as np

from pacmeg.filt.bands import BANDWIDTH_POLICIES, BandwidthPolicy
from pacmeg.pac.statistics import STATISTICS, CouplingStatistic
from pacmeg.pac.surrogates import SURROGATE_METHODS
from pacmeg.utils._defaults import (
    _DEFAULT_AMP_BANDW,
    _DEFAULT_AMP_BANDW_METHOD,
    _DEFAULT_FILT_ORDER,
    _DEFAULT_METHOD,
    _DEFAULT_SURR_N,
    _LOW_PHASE_FREQ,
    _LOW_PHASE_MAX_FILT_ORDER,
)
from pacmeg.utils._utils import _int_like, _number_like
from pacmeg.utils.errors import ConfigError, ConfigWarning


class PACConfig:
    """Validated options of a PAC analysis.

    All options are checked on initialisation, before any data is filtered, and a
    :class:`~pacmeg.utils.ConfigError` is raised for the first invalid option.

    Parameters
    ----------
    Fs : int | float
        Sampling frequency (in Hz) of the data.

    phase_freqs : list of int | ~numpy.ndarray of int
        Centre frequencies (in Hz) whose phase is used, e.g. ``range(8, 14)``. Each
        frequency is filtered with a passband of ``[freq - 1, freq + 1]`` Hz.

    amp_freqs : list of int | ~numpy.ndarray of int | None (default None)
        Centre frequencies (in Hz) whose amplitude is used. If :obj:`None`, every
        second frequency from ``max(phase_freqs)`` up to the Nyquist frequency is used.

    filt_order : int (default ``4``)
        Order of the band-pass filters.

    amp_bandw_method : ``"number"`` | ``"maxphase"`` | ``"centre_freq"`` (default ``"maxphase"``)
        How the passband of the amplitude frequencies is chosen: ``"number"`` -
        ``freq -/+ amp_bandw``; ``"maxphase"`` - ``freq -/+ 1.5 * max(phase_freqs)``;
        ``"centre_freq"`` - ``round(freq -/+ freq / 2.5)``.

    amp_bandw : int | float (default ``10``)
        Half-bandwidth (in Hz) of the amplitude passbands. Only used if
        ``amp_bandw_method="number"``.

    method : ``"tort"`` | ``"ozkurt"`` | ``"plv"`` | ``"canolty"`` (default ``"tort"``)
        Statistic used to quantify PAC. Case-insensitive.

    surr_method : ``"swap_blocks"`` | None (default None)
        Method for generating surrogate data. If :obj:`None`, no surrogates are
        computed.

    surr_N : int (default ``200``)
        Number of surrogates to compute.

    random_state : int | ~numpy.random.RandomState | None (default None)
        Seed or random state for generating surrogates.

    n_jobs : int (default ``1``)
        Number of jobs to run in parallel. If ``-1``, all available CPUs are used.

    verbose : bool (default True)
        Whether or not to report the progress of the processing.

    Attributes
    ----------
    statistic : ~pacmeg.pac.CouplingStatistic
        Statistic corresponding to ``method``.

    bandwidth_policy : ~pacmeg.filt.BandwidthPolicy
        Policy corresponding to ``amp_bandw_method``.

    Warns
    -----
    ConfigWarning
        If ``min(phase_freqs) < 7`` and ``filt_order > 3``.

    Raises
    ------
    ConfigError
        If an option is missing or invalid.

    DetectabilityError
        If the amplitude passbands cannot resolve PAC at the phase frequencies.
    """  # noqa: E501

    statistic: CouplingStatistic = None
    bandwidth_policy: BandwidthPolicy = None

    def __init__(
        self,
        Fs: int | float | None = None,
        phase_freqs: list[int] | np.ndarray | None = None,
        amp_freqs: list[int] | np.ndarray | None = None,
        filt_order: int = _DEFAULT_FILT_ORDER,
        amp_bandw_method: str = _DEFAULT_AMP_BANDW_METHOD,
        amp_bandw: int | float = _DEFAULT_AMP_BANDW,
        method: str = _DEFAULT_METHOD,
        surr_method: str | None = None,
        surr_N: int = _DEFAULT_SURR_N,
        random_state: int | np.random.RandomState | None = None,
        n_jobs: int = 1,
        verbose: bool = True,
    ) -> None:
        self._sort_sampling_freq(Fs)
        self._sort_freqs(phase_freqs, amp_freqs)
        self._sort_filter(filt_order, amp_bandw_method, amp_bandw)
        self._sort_method(method)
        self._sort_surrogates(surr_method, surr_N, random_state)
        self._sort_parallelisation(n_jobs)

        if not isinstance(verbose, bool):
            raise ConfigError("`verbose` must be a bool.")
        self.verbose = verbose

        if (
            self.phase_freqs.min() < _LOW_PHASE_FREQ
            and self.filt_order > _LOW_PHASE_MAX_FILT_ORDER
        ):
            warn(
                "Think about using a lower filter order (e.g. `filt_order=3`) for "
                f"phase frequencies below {_LOW_PHASE_FREQ} Hz.",
                ConfigWarning,
            )

        self.bandwidth_policy.check_detectable(self.amp_freqs)

    @classmethod
    def from_dict(cls, cfg: Mapping) -> "PACConfig":
        """Create a configuration from a mapping of options.

        Parameters
        ----------
        cfg : dict
            Options of the analysis, with the same names as the parameters of
            :class:`~pacmeg.pac.PACConfig`.

        Returns
        -------
        config : ~pacmeg.pac.PACConfig
            The validated configuration.
        """
        if not isinstance(cfg, Mapping):
            raise ConfigError("`cfg` must be a dict.")
        unknown = sorted(set(cfg) - set(cls._option_names()))
        if unknown:
            raise ConfigError(f"Unrecognised options in `cfg`: {unknown}.")
        return cls(**cfg)

    @staticmethod
    def _option_names() -> tuple[str]:
        return (
            "Fs",
            "phase_freqs",
            "amp_freqs",
            "filt_order",
            "amp_bandw_method",
            "amp_bandw",
            "method",
            "surr_method",
            "surr_N",
            "random_state",
            "n_jobs",
            "verbose",
        )

    def _sort_sampling_freq(self, Fs: int | float | None) -> None:
        """Sort sampling frequency input."""
        if Fs is None:
            raise ConfigError("Please specify `Fs`.")
        if isinstance(Fs, bool) or not isinstance(Fs, _number_like):
            raise ConfigError("`Fs` must be numeric (e.g. 1000).")
        if not np.isfinite(Fs) or Fs <= 0:
            raise ConfigError("`Fs` must be > 0.")
        self.Fs = Fs

    def _sort_freqs(
        self,
        phase_freqs: list[int] | np.ndarray | None,
        amp_freqs: list[int] | np.ndarray | None,
    ) -> None:
        """Sort phase and amplitude frequency inputs."""
        if phase_freqs is None:
            raise ConfigError("Please specify `phase_freqs`.")
        self.phase_freqs = self._check_freqs(phase_freqs, "phase_freqs")

        if amp_freqs is None:
            amp_freqs = np.arange(self.phase_freqs.max(), np.floor(self.Fs / 2) + 1, 2)
            if amp_freqs.size == 0:
                raise ConfigError(
                    "No amplitude frequencies lie between the highest phase frequency "
                    "and the Nyquist frequency. Please specify `amp_freqs`."
                )
        self.amp_freqs = self._check_freqs(amp_freqs, "amp_freqs")

    def _check_freqs(
        self, freqs: list[int] | np.ndarray, name: str
    ) -> np.ndarray:
        """Check frequencies are integer-valued and within range."""
        if isinstance(freqs, _number_like):
            freqs = [freqs]
        try:
            freqs = np.asarray(freqs, dtype=np.float64)
        except (TypeError, ValueError) as error:
            raise ConfigError(f"Entries of `{name}` must be numeric.") from error
        if freqs.ndim != 1 or freqs.size == 0:
            raise ConfigError(f"`{name}` must be a non-empty 1D list of frequencies.")
        if not np.all(np.isfinite(freqs)) or np.any(freqs != np.floor(freqs)):
            raise ConfigError(f"Entries of `{name}` must be integer-valued.")
        if np.any(freqs <= 0):
            raise ConfigError(f"Entries of `{name}` must be > 0.")
        if np.any(freqs > self.Fs / 2):
            raise ConfigError(
                f"Entries of `{name}` must be <= the Nyquist frequency."
            )

        return freqs.astype(np.int64)

    def _sort_filter(
        self, filt_order: int, amp_bandw_method: str, amp_bandw: int | float
    ) -> None:
        """Sort filtering inputs."""
        if isinstance(filt_order, bool) or not isinstance(filt_order, _int_like):
            raise ConfigError("`filt_order` must be an int.")
        if filt_order < 1:
            raise ConfigError("`filt_order` must be >= 1.")
        self.filt_order = int(filt_order)

        if amp_bandw_method not in BANDWIDTH_POLICIES:
            raise ConfigError(
                "`amp_bandw_method` must be one of "
                f"{list(BANDWIDTH_POLICIES.keys())}."
            )
        self.amp_bandw_method = amp_bandw_method

        if isinstance(amp_bandw, bool) or not isinstance(amp_bandw, _number_like):
            raise ConfigError("`amp_bandw` must be an int or a float.")
        if amp_bandw <= 0:
            raise ConfigError("`amp_bandw` must be > 0.")
        self.amp_bandw = amp_bandw

        self.bandwidth_policy = BANDWIDTH_POLICIES[amp_bandw_method](
            self.phase_freqs, amp_bandw
        )

    def _sort_method(self, method: str) -> None:
        """Sort PAC statistic input."""
        if not isinstance(method, str):
            raise ConfigError("`method` must be a str.")
        method = method.lower()
        if method not in STATISTICS:
            raise ConfigError(f"`method` must be one of {list(STATISTICS.keys())}.")
        self.method = method
        self.statistic = STATISTICS[method]()

    def _sort_surrogates(
        self,
        surr_method: str | None,
        surr_N: int,
        random_state: int | np.random.RandomState | None,
    ) -> None:
        """Sort surrogate inputs."""
        if surr_method is not None and surr_method not in SURROGATE_METHODS:
            raise ConfigError(
                f"`surr_method` must be one of {list(SURROGATE_METHODS)} or None."
            )
        self.surr_method = surr_method

        if isinstance(surr_N, bool) or not isinstance(surr_N, _int_like):
            raise ConfigError("`surr_N` must be an int.")
        if surr_N < 1:
            raise ConfigError("`surr_N` must be >= 1.")
        self.surr_N = int(surr_N)

        if random_state is not None and not isinstance(
            random_state, (_int_like, np.random.RandomState, np.random.Generator)
        ):
            raise ConfigError(
                "`random_state` must be an int, a NumPy random state, or None."
            )
        self.random_state = random_state

    def _sort_parallelisation(self, n_jobs: int) -> None:
        """Sort parallelisation inputs."""
        if isinstance(n_jobs, bool) or not isinstance(n_jobs, _int_like):
            raise ConfigError("`n_jobs` must be an integer.")
        if n_jobs < 1 and n_jobs != -1:
            raise ConfigError("`n_jobs` must be >= 1 or -1.")
        if n_jobs == -1:
            n_jobs = cpu_count()

        self.n_jobs = n_jobs

    def __repr__(self) -> str:
        """Return printable representation of the object."""
        repr_ = (
            f"<PACConfig: {self.method} | {self.phase_freqs.size} phase freqs., "
            f"{self.amp_freqs.size} amp. freqs. | {self.amp_bandw_method} bandwidth"
        )
        if self.surr_method is not None:
            repr_ += f" | {self.surr_N} surrogates ({self.surr_method})"
        repr_ += ">"

        return repr_

    def copy(self):
        """Return a copy of the object."""
        return deepcopy(self)
