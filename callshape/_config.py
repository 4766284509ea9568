import typing

_max_parameters = None  # type: typing.Optional[int]
_warn_threshold = 10000


def get_max_parameters() -> typing.Optional[int]:
    """
    Return the largest parameter count that will be permuted, or ``None`` if
    there is no ceiling.
    """
    return _max_parameters


def set_max_parameters(limit: typing.Optional[int]) -> None:
    """
    Set the largest parameter count that will be permuted. By default, there
    is no ceiling (``None``).
    """
    # pylint: disable=W0603, global-statement
    if limit is not None and \
            (not isinstance(limit, int) or isinstance(limit, bool)):
        raise TypeError("'limit' must be int or None.")
    if limit is not None and limit < 0:
        raise ValueError("'limit' must not be negative.")
    global _max_parameters
    _max_parameters = limit


def get_warn_threshold() -> int:
    """
    Return the number of call variants above which a warning is logged.
    """
    return _warn_threshold


def set_warn_threshold(count: int) -> None:
    """
    Set the number of call variants above which a warning is logged.
    """
    # pylint: disable=W0603, global-statement
    if not isinstance(count, int) or isinstance(count, bool):
        raise TypeError("'count' must be int.")
    global _warn_threshold
    _warn_threshold = count
