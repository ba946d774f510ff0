"""Tests for PAC statistics."""

import numpy as np
import pytest

from pacmeg.filt import HilbertTransform
from pacmeg.pac import (
    STATISTICS,
    CanoltyMI,
    CouplingStatistic,
    OzkurtMI,
    PhaseLockingValue,
    TortMI,
    compute_comodulogram,
)


@pytest.mark.parametrize("method", ["tort", "ozkurt", "plv", "canolty"])
def test_statistic_registry(method: str) -> None:
    """Test statistics can be looked up by name."""
    statistic = STATISTICS[method]()
    assert isinstance(statistic, CouplingStatistic)
    assert statistic.name == method
    assert repr(statistic) == f"<CouplingStatistic: {method}>"


def test_tort_bounds() -> None:
    """Test the Tort MI is 1 for perfect coupling and 0 for none."""
    n_bins = 18
    bin_centres = -np.pi + (np.arange(n_bins) + 0.5) * 2 * np.pi / n_bins
    phase = np.tile(bin_centres, 100)

    # amplitude only present in one phase bin
    amplitude = np.where(phase == bin_centres[0], 1.0, 0.0)
    assert TortMI().compute(phase, amplitude) == pytest.approx(1.0)

    # amplitude equal in every phase bin
    assert TortMI().compute(phase, np.ones_like(phase)) == pytest.approx(0.0)

    # amplitude independent of phase
    random = np.random.RandomState(44)
    phase = random.uniform(-np.pi, np.pi, 100000)
    amplitude = random.rayleigh(size=100000)
    mi = TortMI().compute(phase, amplitude)
    assert 0 <= mi < 0.01


def test_tort_monotonic(uniform_phase: np.ndarray) -> None:
    """Test the Tort MI increases with the depth of modulation."""
    mis = [
        TortMI().compute(uniform_phase, 1 + depth * np.cos(uniform_phase))
        for depth in [0.0, 0.25, 0.5, 0.75, 1.0]
    ]
    assert mis[0] == pytest.approx(0.0, abs=1e-10)
    assert np.all(np.diff(mis) > 0)
    assert np.all(np.array(mis) <= 1)


def test_tort_edge_cases() -> None:
    """Test the Tort MI handles empty bins, zero amplitude, and phase of pi."""
    # all amplitudes zero
    phase = np.linspace(-np.pi, np.pi, 100, endpoint=False)
    assert np.isnan(TortMI().compute(phase, np.zeros_like(phase)))

    # phase of exactly pi is placed in the last bin, all others empty
    assert TortMI().compute(np.full(10, np.pi), np.ones(10)) == pytest.approx(1.0)
    assert TortMI().compute(np.full(10, -np.pi), np.ones(10)) == pytest.approx(1.0)

    # fewer bins
    assert TortMI(n_bins=4).n_bins == 4
    phase = np.array([-3.0, -1.0, 1.0, 3.0])
    assert TortMI(n_bins=4).compute(phase, np.ones(4)) == pytest.approx(0.0)


def test_mean_vector_length(uniform_phase: np.ndarray) -> None:
    """Test the Canolty and Ozkurt MIs for a known modulation."""
    n_times = uniform_phase.size
    amplitude = 1 + np.cos(uniform_phase)

    # mean of (1 + cos(phi)) * exp(i * phi) over whole cycles is 0.5
    assert CanoltyMI().compute(uniform_phase, amplitude) == pytest.approx(0.5)
    assert OzkurtMI().compute(uniform_phase, amplitude) == pytest.approx(
        0.5 / np.sqrt(n_times)
    )

    # no modulation
    flat = np.ones(n_times)
    assert CanoltyMI().compute(uniform_phase, flat) == pytest.approx(0.0, abs=1e-10)
    assert OzkurtMI().compute(uniform_phase, flat) == pytest.approx(0.0, abs=1e-10)

    # Canolty MI scales with amplitude, Ozkurt MI does not
    assert CanoltyMI().compute(uniform_phase, 2 * amplitude) == pytest.approx(1.0)
    assert OzkurtMI().compute(uniform_phase, 2 * amplitude) == pytest.approx(
        0.5 / np.sqrt(n_times)
    )


@pytest.mark.parametrize("method", ["tort", "ozkurt"])
def test_zero_amplitude(uniform_phase: np.ndarray, method: str) -> None:
    """Test normalised statistics give NaN for an all-zero amplitude."""
    statistic = STATISTICS[method]()
    assert np.isnan(statistic.compute(uniform_phase, np.zeros_like(uniform_phase)))

    comodulogram = compute_comodulogram(
        uniform_phase[np.newaxis], np.zeros((2, uniform_phase.size)), statistic
    )
    assert comodulogram.shape == (2, 1)
    assert np.all(np.isnan(comodulogram))


def test_phase_locking_value() -> None:
    """Test the PLV between a phase and an envelope following it."""
    times = np.arange(10000) / 500
    phase = HilbertTransform().compute_phase(np.sin(2 * np.pi * 10 * times))

    # envelope peaking at phase 0
    amplitude = 1 + np.cos(phase)
    assert PhaseLockingValue().compute(phase, amplitude) == pytest.approx(
        1.0, abs=0.01
    )

    # envelope peaking at a different phase is still locked
    amplitude = 1 + np.cos(phase + np.pi / 2)
    assert PhaseLockingValue().compute(phase, amplitude) == pytest.approx(
        1.0, abs=0.01
    )

    # envelope independent of phase
    random = np.random.RandomState(44)
    amplitude = np.abs(HilbertTransform().compute(random.randn(times.size)))
    assert PhaseLockingValue().compute(phase, amplitude) < 0.1

    # zero envelope does not raise
    assert np.isfinite(PhaseLockingValue().compute(phase, np.zeros_like(phase)))

    # custom analytic signal extractor is used
    statistic = PhaseLockingValue(analytic=HilbertTransform())
    assert isinstance(statistic.analytic, HilbertTransform)


@pytest.mark.parametrize("method", ["tort", "ozkurt", "plv", "canolty"])
def test_compute_comodulogram(method: str) -> None:
    """Test `compute_comodulogram`."""
    random = np.random.RandomState(44)
    n_times = 1000
    phase_series = random.uniform(-np.pi, np.pi, (2, n_times))
    amp_series = random.rayleigh(size=(3, n_times))
    statistic = STATISTICS[method]()

    comodulogram = compute_comodulogram(phase_series, amp_series, statistic)
    assert isinstance(comodulogram, np.ndarray)
    assert comodulogram.shape == (3, 2), (
        "`comodulogram` should have shape [amplitude bands, phase bands]."
    )
    assert comodulogram.dtype == np.float64
    assert np.all(comodulogram >= 0)
    assert comodulogram[2, 1] == pytest.approx(
        statistic.compute(phase_series[1], amp_series[2])
    )

    comodulogram = compute_comodulogram(
        phase_series, amp_series, statistic, precision=np.float32
    )
    assert comodulogram.dtype == np.float32

    with pytest.raises(
        ValueError, match="`phase_series` and `amp_series` must have the same number"
    ):
        compute_comodulogram(phase_series, amp_series[:, :-1], statistic)
