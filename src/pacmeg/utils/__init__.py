"""Helper tools for processing and storing results."""

from .errors import ConfigError, ConfigWarning, DetectabilityError, FilterError
from .results import ResultsPAC
from .utils import set_precision
