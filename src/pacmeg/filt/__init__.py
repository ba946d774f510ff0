"""Tools for filtering data into phase and amplitude bands."""

from .bands import (
    BANDWIDTH_POLICIES,
    BandwidthPolicy,
    CentreFreqBandwidth,
    FrequencyBand,
    MaxPhaseBandwidth,
    NumberBandwidth,
    get_phase_bands,
)
from .filters import (
    AnalyticSignal,
    BandPassFilter,
    ButterworthFilter,
    HilbertTransform,
    filter_bands,
)
