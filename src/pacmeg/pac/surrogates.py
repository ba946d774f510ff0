"""Tools for generating surrogate data for PAC statistics."""

from collections.abc import Iterator

import numpy as np
from mne.utils import check_random_state

from pacmeg.pac.statistics import CouplingStatistic, compute_comodulogram
from pacmeg.utils._defaults import _precision
from pacmeg.utils._utils import _compute_in_parallel


SURROGATE_METHODS = ("swap_blocks",)


def draw_cut_points(
    n_times: int,
    n_amps: int,
    n_surrogates: int,
    random_state: int | np.random.RandomState | None = None,
) -> np.ndarray:
    """Draw the points at which amplitude series are cut to form surrogates.

    Parameters
    ----------
    n_times : int
        Number of timepoints in the amplitude series.

    n_amps : int
        Number of amplitude bands.

    n_surrogates : int
        Number of surrogates.

    random_state : int | ~numpy.random.RandomState | None (default None)
        Seed or random state used to draw the cut points.

    Returns
    -------
    cut_points : ~numpy.ndarray of int, shape of [amplitude bands, surrogates]
        Cut points drawn uniformly from ``[ceil(n_times / 10) - 1, n_times - 1]``,
        i.e. from the ``ceil(n_times / 10)``-th to the last sample. Each amplitude band
        and surrogate has an independent draw.

    Notes
    -----
    A cut point of ``n_times`` would leave the series unrotated, so it is never
    drawn.
    """
    random = check_random_state(random_state)
    low = int(np.ceil(n_times / 10)) - 1
    size = (n_amps, n_surrogates)
    if isinstance(random, np.random.Generator):
        return random.integers(low, n_times - 1, size=size, endpoint=True)
    return random.randint(low, n_times, size=size)


def rotate(data: np.ndarray, cut_point: int) -> np.ndarray:
    """Circularly rotate a timeseries at a cut point.

    Parameters
    ----------
    data : ~numpy.ndarray, shape of [..., times]
        Data to rotate.

    cut_point : int
        Index at which the data is cut. The block from ``cut_point`` onwards is moved
        in front of the block preceding it.

    Returns
    -------
    rotated : ~numpy.ndarray, shape of [..., times]
        The rotated data. A copy of ``data`` if ``cut_point`` is ``0`` or the number
        of timepoints.
    """
    return np.concatenate((data[..., cut_point:], data[..., :cut_point]), axis=-1)


def swap_blocks(amp_series: np.ndarray, cut_points: np.ndarray) -> np.ndarray:
    """Create one surrogate of each amplitude series by swapping blocks.

    Parameters
    ----------
    amp_series : ~numpy.ndarray, shape of [amplitude bands, times]
        Instantaneous amplitude of each amplitude band.

    cut_points : ~numpy.ndarray of int, shape of [amplitude bands]
        Cut point of each amplitude band.

    Returns
    -------
    surrogates : ~numpy.ndarray, shape of [amplitude bands, times]
        Rotated amplitude series.
    """
    return np.array(
        [rotate(series, cut_point) for series, cut_point in zip(amp_series, cut_points)]
    )


def _surrogate_work_items(cut_points: np.ndarray) -> Iterator[dict]:
    """Yield the independent inputs of each surrogate comodulogram."""
    for surr_i in range(cut_points.shape[1]):
        yield {"cut_points": cut_points[:, surr_i]}


def _compute_surrogate_comodulogram(
    cut_points: np.ndarray,
    phase_series: np.ndarray,
    amp_series: np.ndarray,
    statistic: CouplingStatistic,
    precision: type,
) -> np.ndarray:
    """Compute the comodulogram of a single surrogate.

    Only the amplitude series are rotated; the phase series are left intact.
    """
    return compute_comodulogram(
        phase_series, swap_blocks(amp_series, cut_points), statistic, precision
    )


def compute_surrogates(
    phase_series: np.ndarray,
    amp_series: np.ndarray,
    statistic: CouplingStatistic,
    n_surrogates: int,
    random_state: int | np.random.RandomState | None = None,
    n_jobs: int = 1,
    verbose: bool = True,
) -> np.ndarray:
    """Compute comodulograms of block-swapped surrogate data.

    Parameters
    ----------
    phase_series : ~numpy.ndarray, shape of [phase bands, times]
        Instantaneous phase of each phase band.

    amp_series : ~numpy.ndarray, shape of [amplitude bands, times]
        Instantaneous amplitude of each amplitude band.

    statistic : ~pacmeg.pac.CouplingStatistic
        Statistic to quantify coupling with.

    n_surrogates : int
        Number of surrogates to compute.

    random_state : int | ~numpy.random.RandomState | None (default None)
        Seed or random state used to draw the cut points.

    n_jobs : int (default ``1``)
        Number of jobs to run in parallel.

    verbose : bool (default True)
        Whether or not to report the progress of the processing.

    Returns
    -------
    surrogates : ~numpy.ndarray, shape of [surrogates, amplitude bands, phase bands]
        Comodulogram of each surrogate.

    Notes
    -----
    All cut points are drawn before any surrogate is computed, so the results do not
    depend on ``n_jobs``.
    """
    cut_points = draw_cut_points(
        amp_series.shape[1], amp_series.shape[0], n_surrogates, random_state
    )

    return _compute_in_parallel(
        func=_compute_surrogate_comodulogram,
        loop_kwargs=list(_surrogate_work_items(cut_points)),
        static_kwargs={
            "phase_series": phase_series,
            "amp_series": amp_series,
            "statistic": statistic,
            "precision": _precision.real,
        },
        output=np.zeros(
            (n_surrogates, amp_series.shape[0], phase_series.shape[0]),
            dtype=_precision.real,
        ),
        message="Computing surrogates...",
        n_jobs=n_jobs,
        verbose=verbose,
        prefer="processes",
    )
