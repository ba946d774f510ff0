"""Public tools for handling processing settings."""

from pacmeg.utils._defaults import _precision


def set_precision(precision: str) -> None:
    """Set the precision of the comodulograms computed by PACMEG.

    Attributes
    ----------
    precision : ``"single"`` | ``"double"``
        Precision to use. Accepts ``"single"`` (values are :obj:`numpy.float32`) and
        ``"double"`` (values are :obj:`numpy.float64`).

    Notes
    -----
    By default, PACMEG uses double precision. Filtering and the coupling statistics
    are always computed in double precision; only the stored comodulograms are
    affected. Single precision halves the memory needed for large surrogate stacks.
    """
    _precision.set_precision(precision)
