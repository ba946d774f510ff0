"""Tools for handling PAC analysis."""

from collections.abc import Mapping
from copy import deepcopy

import numpy as np

from pacmeg.filt import (
    AnalyticSignal,
    BandPassFilter,
    ButterworthFilter,
    HilbertTransform,
    filter_bands,
    get_phase_bands,
)
from pacmeg.pac.config import PACConfig
from pacmeg.pac.statistics import compute_comodulogram
from pacmeg.pac.surrogates import compute_surrogates
from pacmeg.utils import ResultsPAC
from pacmeg.utils._defaults import (
    _DEFAULT_AMP_BANDW,
    _DEFAULT_AMP_BANDW_METHOD,
    _DEFAULT_FILT_ORDER,
    _DEFAULT_METHOD,
    _DEFAULT_SURR_N,
    _precision,
)
from pacmeg.utils._utils import _number_like


class PAC:
    """Class for computing phase-amplitude coupling (PAC) of a timeseries.

    Parameters
    ----------
    data : ~numpy.ndarray, shape of [times] | shape of [1, times]
        Real-valued timeseries, e.g. of a virtual electrode.

    sampling_freq : int | float
        Sampling frequency (in Hz) of ``data``.

    band_filter : ~pacmeg.filt.BandPassFilter | None (default None)
        Filter used to isolate the phase and amplitude bands. If :obj:`None`, a
        zero-phase Butterworth filter (:class:`~pacmeg.filt.ButterworthFilter`) is
        used.

    analytic : ~pacmeg.filt.AnalyticSignal | None (default None)
        Extractor of the instantaneous phase and amplitude. If :obj:`None`, the Hilbert
        transform (:class:`~pacmeg.filt.HilbertTransform`) is used.

    verbose : bool (default True)
        Whether or not to report the progress of the processing.

    Methods
    -------
    compute :
        Compute PAC between all phase and amplitude frequencies.

    copy :
        Return a copy of the object.

    Attributes
    ----------
    results : ~pacmeg.utils.ResultsPAC
        PAC results.

    data : ~numpy.ndarray, shape of [times]
        The timeseries.

    sampling_freq : int | float
        Sampling frequency (in Hz) of ``data``.

    config : ~pacmeg.pac.PACConfig
        Configuration of the last computation.

    verbose : bool
        Whether or not to report the progress of the processing.
    """

    _config: PACConfig = None

    _phase_series: np.ndarray = None
    _amp_series: np.ndarray = None

    _pac: np.ndarray = None
    _pac_surrogates: np.ndarray = None

    _results: ResultsPAC = None

    def __init__(
        self,
        data: np.ndarray,
        sampling_freq: int | float,
        band_filter: BandPassFilter | None = None,
        analytic: AnalyticSignal | None = None,
        verbose: bool = True,
    ) -> None:
        self._sort_init_inputs(data, sampling_freq, band_filter, analytic, verbose)

    def _sort_init_inputs(
        self,
        data: np.ndarray,
        sampling_freq: int | float,
        band_filter: BandPassFilter | None,
        analytic: AnalyticSignal | None,
        verbose: bool,
    ) -> None:
        """Check init. inputs are appropriate."""
        if not isinstance(data, np.ndarray):
            raise TypeError("`data` must be a NumPy array.")
        if data.ndim == 2 and data.shape[0] == 1:
            data = data[0]
        if data.ndim != 1:
            raise ValueError("`data` must be a 1D array or a 2D array of one row.")
        if not np.isrealobj(data):
            raise ValueError("`data` must be real-valued.")
        if not np.all(np.isfinite(data)):
            raise ValueError("`data` must not contain NaN or infinite values.")

        if isinstance(sampling_freq, bool) or not isinstance(
            sampling_freq, _number_like
        ):
            raise TypeError("`sampling_freq` must be an int or a float.")

        if band_filter is None:
            band_filter = ButterworthFilter()
        if not isinstance(band_filter, BandPassFilter):
            raise TypeError("`band_filter` must be a BandPassFilter or None.")
        if analytic is None:
            analytic = HilbertTransform()
        if not isinstance(analytic, AnalyticSignal):
            raise TypeError("`analytic` must be an AnalyticSignal or None.")

        if not isinstance(verbose, bool):
            raise TypeError("`verbose` must be a bool.")

        self._data = np.array(data, dtype=np.float64)  # copy so input is untouched
        self.sampling_freq = sampling_freq
        self.band_filter = band_filter
        self.analytic = analytic
        self.verbose = verbose

    def compute(
        self,
        phase_freqs: list[int] | np.ndarray,
        amp_freqs: list[int] | np.ndarray | None = None,
        filt_order: int = _DEFAULT_FILT_ORDER,
        amp_bandw_method: str = _DEFAULT_AMP_BANDW_METHOD,
        amp_bandw: int | float = _DEFAULT_AMP_BANDW,
        method: str = _DEFAULT_METHOD,
        surr_method: str | None = None,
        surr_N: int = _DEFAULT_SURR_N,
        random_state: int | np.random.RandomState | None = None,
        n_jobs: int = 1,
    ) -> None:
        r"""Compute PAC between all phase and amplitude frequencies.

        Parameters
        ----------
        phase_freqs : list of int | ~numpy.ndarray of int
            Centre frequencies (in Hz) whose phase is used.

        amp_freqs : list of int | ~numpy.ndarray of int | None (default None)
            Centre frequencies (in Hz) whose amplitude is used. If :obj:`None`, every
            second frequency from ``max(phase_freqs)`` up to the Nyquist frequency is
            used.

        filt_order : int (default ``4``)
            Order of the band-pass filters.

        amp_bandw_method : ``"number"`` | ``"maxphase"`` | ``"centre_freq"`` (default ``"maxphase"``)
            How the passband of the amplitude frequencies is chosen. See
            :class:`~pacmeg.pac.PACConfig`.

        amp_bandw : int | float (default ``10``)
            Half-bandwidth (in Hz) of the amplitude passbands when
            ``amp_bandw_method="number"``.

        method : ``"tort"`` | ``"ozkurt"`` | ``"plv"`` | ``"canolty"`` (default ``"tort"``)
            Statistic used to quantify PAC.

        surr_method : ``"swap_blocks"`` | None (default None)
            Method for generating surrogate data. If :obj:`None`, no surrogates are
            computed.

        surr_N : int (default ``200``)
            Number of surrogates to compute.

        random_state : int | ~numpy.random.RandomState | None (default None)
            Seed or random state for generating surrogates.

        n_jobs : int (default ``1``)
            Number of jobs to run in parallel. If ``-1``, all available CPUs are used.

        Notes
        -----
        The data is filtered into a band of :math:`[f_p-1, f_p+1]` Hz for each phase
        frequency :math:`f_p` and the instantaneous phase :math:`\phi` extracted from
        the analytic signal. The same is done for each amplitude frequency using the
        chosen bandwidth, extracting the amplitude envelope :math:`A`. Coupling is then
        quantified for every pair of phase and amplitude frequencies.

        With ``surr_method="swap_blocks"``, each amplitude envelope is cut at a random
        point and the two blocks swapped for every surrogate, destroying the temporal
        relationship between phase and amplitude whilst preserving the structure of
        both. The phase series are never altered.
        """  # noqa: E501
        config = PACConfig(
            Fs=self.sampling_freq,
            phase_freqs=phase_freqs,
            amp_freqs=amp_freqs,
            filt_order=filt_order,
            amp_bandw_method=amp_bandw_method,
            amp_bandw=amp_bandw,
            method=method,
            surr_method=surr_method,
            surr_N=surr_N,
            random_state=random_state,
            n_jobs=n_jobs,
            verbose=self.verbose,
        )
        self._compute_from_config(config)

    def _compute_from_config(self, config: PACConfig) -> None:
        """Compute PAC for a validated configuration."""
        self._reset_attrs()
        self._config = config

        if self.verbose:
            print(f"Using the {config.method} method for PAC computation\n")

        self._filter_phase()
        self._filter_amplitude()
        self._compute_pac()
        if config.surr_method is not None:
            self._compute_surrogates()
        self._store_results()

        if self.verbose:
            print("    ... PAC computation finished\n")

    def _reset_attrs(self) -> None:
        """Reset attrs. of the object to prevent interference."""
        self._config = None
        self._phase_series = None
        self._amp_series = None
        self._pac = None
        self._pac_surrogates = None
        self._results = None

    def _filter_phase(self) -> None:
        """Filter data at the phase frequencies and extract the phase."""
        if self.verbose:
            print("    Filtering phase...")

        self._phase_series = filter_bands(
            data=self._data,
            sampling_freq=self.sampling_freq,
            bands=get_phase_bands(self._config.phase_freqs),
            filt_order=self._config.filt_order,
            band_filter=self.band_filter,
            analytic=self.analytic,
        )

    def _filter_amplitude(self) -> None:
        """Filter data at the amplitude frequencies and extract the amplitude."""
        policy = self._config.bandwidth_policy
        if self.verbose:
            print("    Filtering amplitude...")
            print(f"        {policy.description}")

        self._amp_series = filter_bands(
            data=self._data,
            sampling_freq=self.sampling_freq,
            bands=policy.get_amp_bands(self._config.amp_freqs),
            filt_order=self._config.filt_order,
            band_filter=self.band_filter,
            analytic=self.analytic,
        )

    def _compute_pac(self) -> None:
        """Compute PAC between all phase and amplitude series."""
        if self.verbose:
            print("    Computing comodulogram...")

        self._pac = compute_comodulogram(
            phase_series=self._phase_series,
            amp_series=self._amp_series,
            statistic=self._config.statistic,
            precision=_precision.real,
        )

    def _compute_surrogates(self) -> None:
        """Compute PAC between the phase series and surrogate amplitude series."""
        if self.verbose:
            print("    Computing surrogate data...")

        try:
            self._pac_surrogates = compute_surrogates(
                phase_series=self._phase_series,
                amp_series=self._amp_series,
                statistic=self._config.statistic,
                n_surrogates=self._config.surr_N,
                random_state=self._config.random_state,
                n_jobs=self._config.n_jobs,
                verbose=self.verbose,
            )
        except MemoryError as error:  # pragma: no cover
            raise MemoryError(
                "Memory allocation for the surrogate computation failed. Try reducing "
                "`surr_N`, or reduce the precision of the computation with "
                "`pacmeg.set_precision('single')`."
            ) from error

        if self.verbose:
            print("        ... Surrogate computation finished\n")

    def _store_results(self) -> None:
        """Store computed results in an object."""
        self._results = ResultsPAC(
            data=self._pac,
            phase_freqs=self._config.phase_freqs,
            amp_freqs=self._config.amp_freqs,
            surrogates=self._pac_surrogates,
            name=f"PAC | {self._config.method}",
        )

    @property
    def results(self) -> ResultsPAC:
        return self._results

    @property
    def config(self) -> PACConfig:
        return self._config

    @property
    def data(self) -> np.ndarray:
        return self._data

    def copy(self):
        """Return a copy of the object."""
        return deepcopy(self)


def compute_pac(
    series: np.ndarray,
    config: PACConfig | Mapping,
    band_filter: BandPassFilter | None = None,
    analytic: AnalyticSignal | None = None,
) -> tuple[np.ndarray, np.ndarray | None]:
    """Compute the PAC comodulogram of a timeseries.

    Parameters
    ----------
    series : ~numpy.ndarray, shape of [times] | shape of [1, times]
        Real-valued timeseries.

    config : ~pacmeg.pac.PACConfig | dict
        Configuration of the analysis. A dict is validated with
        :meth:`~pacmeg.pac.PACConfig.from_dict`, e.g.
        ``{"Fs": 1000, "phase_freqs": range(8, 14), "amp_freqs": range(40, 102, 2)}``.

    band_filter : ~pacmeg.filt.BandPassFilter | None (default None)
        Filter used to isolate the bands. If :obj:`None`, a zero-phase Butterworth
        filter is used.

    analytic : ~pacmeg.filt.AnalyticSignal | None (default None)
        Extractor of the instantaneous phase and amplitude. If :obj:`None`, the Hilbert
        transform is used.

    Returns
    -------
    comodulogram : ~numpy.ndarray, shape of [amplitude frequencies, phase frequencies]
        Coupling strength between each phase and amplitude frequency.

    surrogates : ~numpy.ndarray, shape of [surrogates, amplitude frequencies, phase frequencies] | None
        Coupling strength of each surrogate, or :obj:`None` if ``surr_method`` is
        :obj:`None`.

    Raises
    ------
    ConfigError
        If the configuration is missing or invalid options.

    DetectabilityError
        If the configuration cannot resolve PAC. Raised before any filtering.

    FilterError
        If the data cannot be filtered.
    """  # noqa: E501
    if not isinstance(config, PACConfig):
        config = PACConfig.from_dict(config)

    pac = PAC(
        data=series,
        sampling_freq=config.Fs,
        band_filter=band_filter,
        analytic=analytic,
        verbose=config.verbose,
    )
    pac._compute_from_config(config)

    return pac.results.get_results(), (
        pac.results.get_results("surrogate") if pac.results.n_surrogates else None
    )
