"""Pytest fixtures for unit tests."""

import numpy as np
import pytest

from pacmeg.utils._utils import _generate_pac_data


@pytest.fixture(scope="session")
def data_sfreq() -> float:
    """Sampling frequency of simulated data for tests."""
    return 500.0


@pytest.fixture(scope="session")
def pac_data(data_sfreq: float) -> np.ndarray:
    """Timeseries with 10 Hz phase coupled to 60 Hz amplitude."""
    return _generate_pac_data(
        n_times=10000, sampling_freq=data_sfreq, phase_freq=10, amp_freq=60
    )


@pytest.fixture(scope="session")
def noise_data() -> np.ndarray:
    """White noise timeseries without coupling."""
    return np.random.RandomState(44).randn(10000)


@pytest.fixture(scope="session")
def uniform_phase() -> np.ndarray:
    """Phases evenly covering a whole number of cycles."""
    return np.linspace(-np.pi, np.pi, 18000, endpoint=False)
