"""Exceptions and warnings raised during PAC computation."""


class ConfigError(ValueError):
    """Raised when a PAC configuration option is missing or invalid."""


class DetectabilityError(ConfigError):
    """Raised when the frequency configuration cannot resolve PAC.

    The amplitude passbands must be wide enough to contain the sidebands produced by
    modulation at the highest phase frequency, otherwise no coupling can be detected.
    """


class FilterError(RuntimeError):
    """Raised when band-pass filtering of the data fails."""


class ConfigWarning(UserWarning):
    """Warning for PAC configurations which are valid but likely suboptimal."""
