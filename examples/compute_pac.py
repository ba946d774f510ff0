"""
================================
Compute phase-amplitude coupling
================================

This example demonstrates how a phase-amplitude coupling (PAC) comodulogram can
be computed with PACMEG, and how surrogate data can be used to assess its
significance.
"""

# %%

import numpy as np

from pacmeg import PAC, compute_pac
from pacmeg.utils._utils import _generate_pac_data

###############################################################################
# Background
# ----------
# PAC quantifies the relationship between the phase of a lower frequency
# :math:`f_p` and the amplitude of a higher frequency :math:`f_a` within a
# single signal, :math:`\vec{x}`, such as that of a virtual electrode.
#
# The signal is band-pass filtered around each phase frequency (with a
# passband of :math:`[f_p-1, f_p+1]` Hz), and the instantaneous phase,
# :math:`\phi`, taken from the analytic signal. The same is done around each
# amplitude frequency, taking the amplitude envelope, :math:`A`. The width of
# the amplitude passbands must be at least as large as the highest phase
# frequency, otherwise the sidebands produced by the modulation are filtered
# out and PAC cannot be detected.
#
# Several statistics are available to quantify PAC. The default is the
# modulation index of :footcite:`Tort2010`, where phases are split into 18
# bins and the mean amplitude in each bin, :math:`P`, is compared to a uniform
# distribution:
#
# :math:`\large MI=\frac{\log(N)-H(P)}{\log(N)}`,
#
# where :math:`H` is the Shannon entropy and :math:`N` the number of bins.
# Also available are the mean vector length of :footcite:`Canolty2006`, its
# normalised form of :footcite:`Ozkurt2012`, and the phase-locking value
# between :math:`\phi` and the phase of :math:`A` :footcite:`Cohen2008`.

###############################################################################
# Generating data
# ---------------
# We will start by generating some data containing coupling between the 10 Hz
# phase and the 60 Hz amplitude of a signal, sampled at 500 Hz.

# %%

sampling_freq = 500  # sampling frequency in Hz
data = _generate_pac_data(n_times=10000, sampling_freq=sampling_freq)

print(f"Data has shape: {data.shape} [times]")

###############################################################################
# Computing PAC
# -------------
# To compute PAC, we start by initialising the :class:`~pacmeg.PAC` class
# object with the data and its sampling frequency. We then call the
# :meth:`~pacmeg.PAC.compute` method, specifying the phase and amplitude
# frequencies of interest. By default, the amplitude passbands are
# :math:`f_a \pm 1.5 \times \max(f_p)` Hz wide (``amp_bandw_method="maxphase"``).
#
# To assess the significance of the coupling, surrogate data is generated by
# cutting each amplitude envelope at a random point and swapping the two
# blocks (``surr_method="swap_blocks"``), which destroys the temporal
# relationship between phase and amplitude whilst preserving their individual
# structure.

# %%

pac = PAC(data=data, sampling_freq=sampling_freq)
pac.compute(
    phase_freqs=np.arange(7, 14),
    amp_freqs=np.arange(40, 102, 2),
    method="tort",
    surr_method="swap_blocks",
    surr_N=100,
    random_state=44,
)

# return results as an array
pac_results = pac.results.get_results()

print(
    f"PAC results: [{pac_results.shape[0]} amplitude frequencies x "
    f"{pac_results.shape[1]} phase frequencies], with "
    f"{pac.results.n_surrogates} surrogates"
)

###############################################################################
# Assessing significance
# ----------------------
# The maximum value of each surrogate comodulogram forms a null distribution
# which is corrected for multiple comparisons across frequencies. Entries of
# the comodulogram above the 95th percentile of this distribution are
# significant at :math:`p < 0.05`.
#
# Alternatively, the comodulogram can be z-scored against the surrogates.

# %%

threshold = pac.results.get_threshold(p_value=0.05)
amp_idx, phase_idx = np.unravel_index(pac_results.argmax(), pac_results.shape)

print(f"Significance threshold: {threshold:.4f}")
print(
    f"Strongest coupling of {pac_results[amp_idx, phase_idx]:.4f} between "
    f"{pac.results.phase_freqs[phase_idx]} Hz phase and "
    f"{pac.results.amp_freqs[amp_idx]} Hz amplitude"
)
print(f"Significant entries: {np.sum(pac_results > threshold)}")
print(f"Maximum z-score: {pac.results.get_zscore().max():.2f}")

###############################################################################
# Configuring the analysis with a dictionary
# ------------------------------------------
# The same analysis can be performed in a single step with
# :func:`~pacmeg.compute_pac`, passing the options as a dictionary. All options
# are validated before any filtering takes place.

# %%

comodulogram, surrogates = compute_pac(
    data,
    {
        "Fs": sampling_freq,
        "phase_freqs": range(7, 14),
        "amp_freqs": range(40, 102, 2),
        "surr_method": "swap_blocks",
        "surr_N": 100,
        "random_state": 44,
        "verbose": False,
    },
)

print(f"Results match: {np.allclose(comodulogram, pac_results)}")

###############################################################################
# References
# ----------
# .. footbibliography::
