class CallshapeError(Exception):
    """
    A common base class for ``callshape`` exceptions
    """
    pass


class ImmutableInstanceError(CallshapeError):
    """
    An error that is raised when trying to set an attribute on a
    :class:`~callshape._immutable.Immutable` instance.
    """
    pass


class ParameterOrderError(CallshapeError, SyntaxError):
    """
    Raised when a required parameter follows a defaulted parameter.
    No dispatch table is produced for such a declaration.

    :ivar parameter: the first required parameter found after the first
        defaulted one
    """
    def __init__(self, message: str, parameter=None) -> None:
        super().__init__(message)
        self.parameter = parameter


class InvariantViolation(CallshapeError, RuntimeError):
    """
    Raised when the permutation engine produces a matrix that breaks its own
    guarantees (a variant is missing a slot, or the reference variant is
    absent). This is a bug in ``callshape``, not in the caller's code.
    """
    pass


class LimitExceededError(CallshapeError, ValueError):
    """
    Raised when a declaration has more parameters than the ceiling set with
    :func:`~callshape.set_max_parameters`.
    """
    pass


class NoMatchError(CallshapeError, TypeError):
    """
    Raised by a :class:`~callshape.DispatchTable` when a call matches none of
    its acceptor patterns.
    """
    pass
