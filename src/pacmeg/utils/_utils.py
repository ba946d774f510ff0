"""Private helper tools for processing results."""

import numpy as np
from mne.parallel import parallel_func
from mne.utils import ProgressBar, set_log_level

from pacmeg.utils._defaults import _precision


# Aliases for type checking
_int_like = (int, np.integer)
_float_like = (float, np.floating)
_number_like = _int_like + _float_like


def _compute_in_parallel(
    func: callable,
    loop_kwargs: list[dict],
    static_kwargs: dict,
    output: np.ndarray,
    message: str,
    n_jobs: int,
    verbose: bool,
    prefer: str = "processes",
) -> np.ndarray:
    """Parallelise a function with a progress bar.

    Parameters
    ----------
    func : callable
        Function to parallelise.

    loop_kwargs : list of dict
        Keyword arguments to pass to the function that change for each iteration of
        the parallelisation.

    static_kwargs : dict
        Keyword arguments to pass to the function that do not change across
        iterations.

    output : numpy.ndarray
        Array to store the output of the computation. Values for each iteration are
        stored in the first dimension, which must be at least as large as the length
        of ``loop_kwargs``.

    message : str
        Message to display in the progress bar.

    n_jobs : int
        Number of jobs to run in parallel.

    verbose : bool
        Whether or not to report the progress of the processing.

    prefer : str (default "processes")
        Whether to use "threads" or "processes" for parallelisation.

    Returns
    -------
    output : numpy.ndarray
        Array with the output of the computation.

    Notes
    -----
    Each iteration writes to its own slice of ``output``, so no locking is needed.
    Does not perform checks on inputs for speed.
    """
    n_steps = len(loop_kwargs)
    n_blocks = int(np.ceil(n_steps / n_jobs))
    parallel, my_parallel_func, _ = parallel_func(
        func, n_jobs, prefer=prefer, verbose=verbose
    )
    old_log_level = set_log_level(
        verbose="INFO" if verbose else "WARNING", return_old_level=True
    )  # need to set log level that is passed to tqdm
    try:
        for block_i in ProgressBar(range(n_blocks), mesg=message):
            idcs = _get_block_indices(block_i, n_steps, n_jobs)
            output[idcs] = parallel(
                my_parallel_func(**loop_kwargs[idx], **static_kwargs) for idx in idcs
            )
    finally:
        set_log_level(verbose=old_log_level)  # reset log level

    return output


def _get_block_indices(block_i: int, limit: int, n_jobs: int) -> np.ndarray:
    """Get the indices for a block of parallel computation, capped by a limit.

    Parameters
    ----------
    block_i : int
        Index of the block to get indices for.

    limit : int
        Maximum index to return.

    n_jobs : int
        Number of jobs to run in parallel.

    Returns
    -------
    indices : numpy.ndarray of int
        Indices for the block of parallel computation.
    """
    return np.arange(block_i * n_jobs, np.min([(block_i + 1) * n_jobs, limit]))


def _round_half_away(values: np.ndarray | float) -> np.ndarray | float:
    """Round to the nearest integer, with halves rounded away from zero.

    NumPy rounds halves to the nearest even number, which would shift some passband
    edges by 1 Hz.
    """
    return np.sign(values) * np.floor(np.abs(values) + 0.5)


def _generate_pac_data(
    n_times: int,
    sampling_freq: int | float,
    phase_freq: int | float = 10,
    amp_freq: int | float = 60,
    coupling: float = 1.0,
    noise: float = 0.1,
    seed: int = 44,
) -> np.ndarray:
    """Generate a timeseries with coupling between a phase and amplitude frequency.

    Parameters
    ----------
    n_times : int
        Number of timepoints to generate.

    sampling_freq : int | float
        Sampling frequency (in Hz) of the data.

    phase_freq : int | float (default ``10``)
        Frequency (in Hz) of the low-frequency oscillation providing the phase.

    amp_freq : int | float (default ``60``)
        Frequency (in Hz) of the high-frequency oscillation whose amplitude is
        modulated.

    coupling : float (default ``1.0``)
        Modulation depth, between 0 (no coupling) and 1 (full coupling).

    noise : float (default ``0.1``)
        Standard deviation of the white noise added to the signal.

    seed : int (default ``44``)
        Seed for the noise.

    Returns
    -------
    data : numpy.ndarray, shape of [times]
        The simulated timeseries.
    """
    random = np.random.RandomState(seed)
    times = np.arange(n_times) / sampling_freq
    phase_signal = np.sin(2 * np.pi * phase_freq * times)
    modulation = (1 + coupling * np.cos(2 * np.pi * phase_freq * times)) / 2
    amp_signal = 0.3 * modulation * np.sin(2 * np.pi * amp_freq * times)

    return (
        phase_signal + amp_signal + noise * random.randn(n_times)
    ).astype(_precision.real)
