"""Helper tools for storing results."""

import numpy as np

from pacmeg.utils._utils import _number_like


class ResultsPAC:
    """Class for storing phase-amplitude coupling (PAC) comodulograms.

    Parameters
    ----------
    data : ~numpy.ndarray, shape of [amplitude frequencies, phase frequencies]
        Comodulogram of the data.

    phase_freqs : ~numpy.ndarray, shape of [phase frequencies]
        Phase frequencies (in Hz) in the results.

    amp_freqs : ~numpy.ndarray, shape of [amplitude frequencies]
        Amplitude frequencies (in Hz) in the results.

    surrogates : ~numpy.ndarray, shape of [surrogates, amplitude frequencies, phase frequencies] | None (default None)
        Comodulograms of surrogate data.

    name : str (default ``"PAC"``)
        Name of the results being stored.

    Methods
    -------
    get_results :
        Return the results.

    get_zscore :
        Return the comodulogram z-scored against the surrogates.

    get_pvalues :
        Return the proportion of surrogates at least as large as the comodulogram.

    get_surrogate_max :
        Return the maximum of each surrogate comodulogram.

    get_threshold :
        Return the significance threshold from the surrogate maxima.

    Attributes
    ----------
    name : str
        Name of the results.

    shape : tuple of int
        Shape of the results i.e. ``[amplitude frequencies, phase frequencies]``.

    phase_freqs : ~numpy.ndarray, shape of [phase frequencies]
        Phase frequencies (in Hz) in the results.

    amp_freqs : ~numpy.ndarray, shape of [amplitude frequencies]
        Amplitude frequencies (in Hz) in the results.

    n_surrogates : int
        Number of surrogates in the results (``0`` if none were computed).
    """  # noqa: E501

    def __repr__(self) -> str:
        """Return printable representation of the object."""
        repr_ = (
            f"<Result: {self.name} | [{self.amp_freqs.size} amp. freqs., "
            f"{self.phase_freqs.size} phase freqs."
        )
        if self.n_surrogates:
            repr_ += f", {self.n_surrogates} surrogates"
        repr_ += "]>"

        return repr_

    def __init__(
        self,
        data: np.ndarray,
        phase_freqs: np.ndarray,
        amp_freqs: np.ndarray,
        surrogates: np.ndarray | None = None,
        name: str = "PAC",
    ) -> None:  # noqa: D107
        self._sort_init_inputs(data, phase_freqs, amp_freqs, surrogates, name)

    def _sort_init_inputs(
        self,
        data: np.ndarray,
        phase_freqs: np.ndarray,
        amp_freqs: np.ndarray,
        surrogates: np.ndarray | None,
        name: str,
    ) -> None:
        """Sort inputs to the object."""
        if not isinstance(data, np.ndarray):
            raise TypeError("`data` must be a NumPy array.")
        if data.ndim != 2:
            raise ValueError("`data` must be a 2D array.")

        if not isinstance(phase_freqs, np.ndarray) or not isinstance(
            amp_freqs, np.ndarray
        ):
            raise TypeError("`phase_freqs` and `amp_freqs` must be NumPy arrays.")
        if phase_freqs.ndim != 1 or amp_freqs.ndim != 1:
            raise ValueError("`phase_freqs` and `amp_freqs` must be 1D arrays.")
        if data.shape != (amp_freqs.size, phase_freqs.size):
            raise ValueError(
                "`data` must have shape [amplitude frequencies, phase frequencies]."
            )

        if surrogates is not None:
            if not isinstance(surrogates, np.ndarray):
                raise TypeError("`surrogates` must be a NumPy array or None.")
            if surrogates.ndim != 3 or surrogates.shape[1:] != data.shape:
                raise ValueError(
                    "`surrogates` must have shape [surrogates, amplitude frequencies, "
                    "phase frequencies]."
                )

        if not isinstance(name, str):
            raise TypeError("`name` must be a string.")

        self._data = data
        self._surrogates = surrogates
        self.phase_freqs = phase_freqs
        self.amp_freqs = amp_freqs
        self.shape = data.shape
        self.n_surrogates = 0 if surrogates is None else surrogates.shape[0]
        self.name = name

    def get_results(self, kind: str = "raw", copy: bool = True) -> np.ndarray:
        """Return the results.

        Parameters
        ----------
        kind : ``"raw"`` | ``"surrogate"`` (default ``"raw"``)
            Which results to return: ``"raw"`` - the comodulogram of the data, with
            shape ``[amplitude frequencies, phase frequencies]``; ``"surrogate"`` - the
            comodulograms of the surrogates, with shape ``[surrogates, amplitude
            frequencies, phase frequencies]``.

        copy : bool (default True)
            Whether or not to return a copy of the results.

        Returns
        -------
        results : ~numpy.ndarray
            The results.
        """
        accepted_kinds = ["raw", "surrogate"]
        if kind not in accepted_kinds:
            raise ValueError("`kind` is not recognised.")
        if not isinstance(copy, bool):
            raise TypeError("`copy` must be a bool.")

        if kind == "raw":
            results = self._data
        else:
            self._check_surrogates(1)
            results = self._surrogates

        if copy:
            results = results.copy()

        return results

    def _check_surrogates(self, min_surrogates: int) -> None:
        """Check enough surrogates are present for a computation."""
        if self.n_surrogates < min_surrogates:
            raise ValueError(
                f"At least {min_surrogates} surrogate(s) are required, but "
                f"{self.n_surrogates} are present. Compute PAC with "
                "`surr_method='swap_blocks'`."
            )

    def get_zscore(self) -> np.ndarray:
        """Return the comodulogram z-scored against the surrogates.

        Returns
        -------
        zscore : ~numpy.ndarray, shape of [amplitude frequencies, phase frequencies]
            Comodulogram minus the mean of the surrogates, divided by the standard
            deviation of the surrogates.

        Notes
        -----
        At least 3 surrogates are required. Where all surrogates of an entry are
        identical (a standard deviation of zero), the z-score is infinite (or NaN if
        the comodulogram also equals the surrogates) and NumPy emits a
        :class:`RuntimeWarning`.
        """
        self._check_surrogates(3)
        return (self._data - self._surrogates.mean(axis=0)) / self._surrogates.std(
            axis=0
        )

    def get_pvalues(self) -> np.ndarray:
        """Return the proportion of surrogates at least as large as the comodulogram.

        Returns
        -------
        pvalues : ~numpy.ndarray, shape of [amplitude frequencies, phase frequencies]
            ``(1 + n) / (1 + n_surrogates)``, where ``n`` is the number of surrogates
            whose value is >= that of the comodulogram.
        """
        self._check_surrogates(1)
        n_greater = np.sum(self._surrogates >= self._data[np.newaxis], axis=0)
        return (1 + n_greater) / (1 + self.n_surrogates)

    def get_surrogate_max(self) -> np.ndarray:
        """Return the maximum of each surrogate comodulogram.

        Returns
        -------
        surrogate_max : ~numpy.ndarray, shape of [surrogates]
            Maximum across frequencies of each surrogate comodulogram, the null
            distribution corrected for multiple comparisons across frequencies.
        """
        self._check_surrogates(1)
        return self._surrogates.reshape(self.n_surrogates, -1).max(axis=1)

    def get_threshold(self, p_value: int | float = 0.05) -> float:
        """Return the significance threshold from the surrogate maxima.

        Parameters
        ----------
        p_value : int | float (default ``0.05``)
            Significance level, between 0 and 1.

        Returns
        -------
        threshold : float
            The ``1 - p_value`` percentile of the surrogate maxima. Entries of the
            comodulogram above this value are significant at ``p_value``.
        """
        if not isinstance(p_value, _number_like):
            raise TypeError("`p_value` must be an int or a float.")
        if p_value <= 0 or p_value >= 1:
            raise ValueError("`p_value` must be > 0 and < 1.")
        return float(np.percentile(self.get_surrogate_max(), 100 * (1 - p_value)))
