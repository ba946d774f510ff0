"""Tests for results classes."""

import numpy as np
import pytest

from pacmeg.utils import ResultsPAC

N_AMPS = 3
N_PHASES = 2


def _generate_results(n_surrogates: int = 0) -> tuple[np.ndarray, np.ndarray | None]:
    """Generate a random comodulogram and surrogates."""
    random = np.random.RandomState(44)
    data = random.rand(N_AMPS, N_PHASES)
    surrogates = (
        random.rand(n_surrogates, N_AMPS, N_PHASES) / 2 if n_surrogates else None
    )
    return data, surrogates


def test_results_pac_error_catch() -> None:
    """Test `ResultsPAC` catches errors."""
    data, surrogates = _generate_results(n_surrogates=5)
    phase_freqs = np.arange(8, 8 + N_PHASES)
    amp_freqs = np.arange(60, 60 + 2 * N_AMPS, 2)

    with pytest.raises(TypeError, match="`data` must be a NumPy array."):
        ResultsPAC(data=data.tolist(), phase_freqs=phase_freqs, amp_freqs=amp_freqs)
    with pytest.raises(ValueError, match="`data` must be a 2D array."):
        ResultsPAC(data=data[0], phase_freqs=phase_freqs, amp_freqs=amp_freqs)

    with pytest.raises(
        TypeError, match="`phase_freqs` and `amp_freqs` must be NumPy arrays."
    ):
        ResultsPAC(data=data, phase_freqs=phase_freqs.tolist(), amp_freqs=amp_freqs)
    with pytest.raises(
        TypeError, match="`phase_freqs` and `amp_freqs` must be NumPy arrays."
    ):
        ResultsPAC(data=data, phase_freqs=phase_freqs, amp_freqs=amp_freqs.tolist())
    with pytest.raises(
        ValueError, match="`phase_freqs` and `amp_freqs` must be 1D arrays."
    ):
        ResultsPAC(
            data=data, phase_freqs=phase_freqs[np.newaxis], amp_freqs=amp_freqs
        )
    with pytest.raises(ValueError, match="`data` must have shape"):
        ResultsPAC(data=data.T, phase_freqs=phase_freqs, amp_freqs=amp_freqs)

    with pytest.raises(
        TypeError, match="`surrogates` must be a NumPy array or None."
    ):
        ResultsPAC(
            data=data,
            phase_freqs=phase_freqs,
            amp_freqs=amp_freqs,
            surrogates=surrogates.tolist(),
        )
    with pytest.raises(ValueError, match="`surrogates` must have shape"):
        ResultsPAC(
            data=data,
            phase_freqs=phase_freqs,
            amp_freqs=amp_freqs,
            surrogates=surrogates[:, :, 0],
        )
    with pytest.raises(ValueError, match="`surrogates` must have shape"):
        ResultsPAC(
            data=data,
            phase_freqs=phase_freqs,
            amp_freqs=amp_freqs,
            surrogates=surrogates[:, :-1],
        )

    with pytest.raises(TypeError, match="`name` must be a string."):
        ResultsPAC(data=data, phase_freqs=phase_freqs, amp_freqs=amp_freqs, name=1)

    results = ResultsPAC(
        data=data, phase_freqs=phase_freqs, amp_freqs=amp_freqs, surrogates=surrogates
    )
    with pytest.raises(ValueError, match="`kind` is not recognised."):
        results.get_results(kind="zscore")
    with pytest.raises(TypeError, match="`copy` must be a bool."):
        results.get_results(copy="true")
    with pytest.raises(TypeError, match="`p_value` must be an int or a float."):
        results.get_threshold(p_value="0.05")
    with pytest.raises(ValueError, match="`p_value` must be > 0 and < 1."):
        results.get_threshold(p_value=1)
    with pytest.raises(ValueError, match="`p_value` must be > 0 and < 1."):
        results.get_threshold(p_value=0)

    # methods needing surrogates
    results = ResultsPAC(data=data, phase_freqs=phase_freqs, amp_freqs=amp_freqs)
    with pytest.raises(ValueError, match="At least 1 surrogate"):
        results.get_results(kind="surrogate")
    with pytest.raises(ValueError, match="At least 1 surrogate"):
        results.get_pvalues()
    with pytest.raises(ValueError, match="At least 1 surrogate"):
        results.get_surrogate_max()
    with pytest.raises(ValueError, match="At least 1 surrogate"):
        results.get_threshold()

    data, surrogates = _generate_results(n_surrogates=2)
    results = ResultsPAC(
        data=data, phase_freqs=phase_freqs, amp_freqs=amp_freqs, surrogates=surrogates
    )
    with pytest.raises(ValueError, match="At least 3 surrogate"):
        results.get_zscore()


def test_results_pac_runs() -> None:
    """Test `ResultsPAC` runs with correct inputs."""
    n_surrogates = 10
    data, surrogates = _generate_results(n_surrogates=n_surrogates)
    phase_freqs = np.arange(8, 8 + N_PHASES)
    amp_freqs = np.arange(60, 60 + 2 * N_AMPS, 2)

    results = ResultsPAC(
        data=data,
        phase_freqs=phase_freqs,
        amp_freqs=amp_freqs,
        surrogates=surrogates,
        name="PAC | tort",
    )
    assert results.shape == (N_AMPS, N_PHASES)
    assert results.n_surrogates == n_surrogates
    assert results.name == "PAC | tort"
    assert repr(results) == (
        f"<Result: PAC | tort | [{N_AMPS} amp. freqs., {N_PHASES} phase freqs., "
        f"{n_surrogates} surrogates]>"
    )

    # get_results
    raw = results.get_results()
    assert np.array_equal(raw, data)
    raw[0, 0] = -1
    assert results.get_results()[0, 0] != -1, "A copy should have been returned."
    assert results.get_results(copy=False) is results.get_results(copy=False)
    assert np.array_equal(results.get_results("surrogate"), surrogates)

    # get_zscore
    zscore = results.get_zscore()
    assert zscore.shape == (N_AMPS, N_PHASES)
    assert np.allclose(
        zscore, (data - surrogates.mean(axis=0)) / surrogates.std(axis=0)
    )

    # get_pvalues
    pvalues = results.get_pvalues()
    assert pvalues.shape == (N_AMPS, N_PHASES)
    assert np.all(pvalues > 0) and np.all(pvalues <= 1)
    expected = (1 + np.sum(surrogates >= data, axis=0)) / (1 + n_surrogates)
    assert np.allclose(pvalues, expected)

    # get_surrogate_max and get_threshold
    surrogate_max = results.get_surrogate_max()
    assert surrogate_max.shape == (n_surrogates,)
    assert np.allclose(surrogate_max, surrogates.max(axis=(1, 2)))
    threshold = results.get_threshold(p_value=0.05)
    assert isinstance(threshold, float)
    assert threshold == pytest.approx(np.percentile(surrogate_max, 95))
    assert results.get_threshold(p_value=0.5) <= threshold

    # without surrogates
    results = ResultsPAC(data=data, phase_freqs=phase_freqs, amp_freqs=amp_freqs)
    assert results.n_surrogates == 0
    assert results.name == "PAC"
    assert repr(results) == (
        f"<Result: PAC | [{N_AMPS} amp. freqs., {N_PHASES} phase freqs.]>"
    )


def test_results_pac_known_values() -> None:
    """Test `ResultsPAC` statistics for known surrogate values."""
    data = np.array([[0.5, 2.5]])
    surrogates = np.array([[[1.0, 0.0]], [[2.0, 1.0]], [[3.0, 2.0]], [[4.0, 3.0]]])
    results = ResultsPAC(
        data=data,
        phase_freqs=np.array([8, 10]),
        amp_freqs=np.array([60]),
        surrogates=surrogates,
    )

    assert np.array_equal(results.get_surrogate_max(), [1.0, 2.0, 3.0, 4.0])
    assert results.get_threshold(p_value=0.5) == pytest.approx(2.5)
    # 4 of 4 surrogates >= 0.5; 1 of 4 surrogates >= 2.5
    assert np.allclose(results.get_pvalues(), [[1.0, 0.4]])
    expected = [[-2.0 / np.std([1, 2, 3, 4]), 1.0 / np.std([0, 1, 2, 3])]]
    assert np.allclose(results.get_zscore(), expected)


def test_results_pac_zscore_constant_surrogates() -> None:
    """Test z-scores against identical surrogates are non-finite with a warning."""
    results = ResultsPAC(
        data=np.array([[0.5, 0.25]]),
        phase_freqs=np.array([8, 10]),
        amp_freqs=np.array([60]),
        surrogates=np.full((3, 1, 2), 0.25),
    )
    with pytest.warns(RuntimeWarning):
        zscore = results.get_zscore()
    assert np.isposinf(zscore[0, 0])
    assert np.isnan(zscore[0, 1])
