"""Tests for toolbox utility functions."""

import numpy as np
import pytest

from pacmeg import PAC
from pacmeg.utils import set_precision
from pacmeg.utils._defaults import _precision
from pacmeg.utils._utils import (
    _generate_pac_data,
    _get_block_indices,
    _round_half_away,
)

set_precision("double")  # make sure precision is as default before testing


@pytest.mark.parametrize("precision_type", ["single", "double"])
def test_set_precision(precision_type: str) -> None:
    """Test `set_precision`."""
    # error catching
    with pytest.raises(
        ValueError, match="precision must be either 'single' or 'double'."
    ):
        set_precision(precision="not_a_precision")

    # default precision should be double
    assert _precision.type == "double"
    assert _precision.real == np.float64

    set_precision(precision=precision_type)

    if precision_type == "single":
        assert _precision.type == "single"
        assert _precision.real == np.float32
        # reset precision to default
        set_precision("double")
    else:
        assert _precision.type == "double"
        assert _precision.real == np.float64


@pytest.mark.parametrize("precision_type", ["single", "double"])
def test_precision_of_results(precision_type: str) -> None:
    """Test comodulograms are returned with the set precision."""
    data = _generate_pac_data(n_times=2000, sampling_freq=500)
    set_precision(precision_type)
    try:
        pac = PAC(data=data, sampling_freq=500, verbose=False)
        pac.compute(
            phase_freqs=[10],
            amp_freqs=[60],
            surr_method="swap_blocks",
            surr_N=3,
            random_state=44,
        )
        assert pac.results.get_results().dtype == _precision.real
        assert pac.results.get_results("surrogate").dtype == _precision.real
    finally:
        set_precision("double")


def test_round_half_away() -> None:
    """Test `_round_half_away`."""
    values = np.array([0.5, 1.5, 2.5, -0.5, -2.5, 2.4, 2.6, 0.0])
    expected = np.array([1.0, 2.0, 3.0, -1.0, -3.0, 2.0, 3.0, 0.0])
    assert np.array_equal(_round_half_away(values), expected)
    assert _round_half_away(26.0 - 26.0 / 2.5) == 16.0  # 15.6
    assert _round_half_away(25.0 + 25.0 / 2.5) == 35.0


def test_get_block_indices() -> None:
    """Test `_get_block_indices`."""
    assert np.array_equal(_get_block_indices(0, 5, 2), [0, 1])
    assert np.array_equal(_get_block_indices(2, 5, 2), [4])


def test_generate_pac_data() -> None:
    """Test `_generate_pac_data`."""
    data = _generate_pac_data(n_times=1000, sampling_freq=500)
    assert isinstance(data, np.ndarray), "`data` should be a NumPy array."
    assert data.shape == (1000,), "`data` should have shape [times]."
    assert data.dtype == _precision.real

    # same seed gives same data
    assert np.array_equal(data, _generate_pac_data(n_times=1000, sampling_freq=500))
    assert not np.array_equal(
        data, _generate_pac_data(n_times=1000, sampling_freq=500, seed=1)
    )

    # without noise or coupling, the signal is two fixed sinusoids
    times = np.arange(1000) / 500
    data = _generate_pac_data(
        n_times=1000, sampling_freq=500, coupling=0.0, noise=0.0
    )
    expected = np.sin(2 * np.pi * 10 * times) + 0.15 * np.sin(
        2 * np.pi * 60 * times
    )
    assert np.allclose(data, expected)
