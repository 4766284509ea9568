import types
import typing

import callshape._immutable as immutable


class CallArguments(immutable.Immutable):
    """
    An immutable container for call arguments: the positional ``args`` and
    the keyword ``kwargs`` of one call, with the keyword order preserved.

    :param args: positional arguments used in a call
    :param kwargs: keyword arguments used in a call
    """
    __slots__ = ('args', 'kwargs')

    def __init__(
            self,
            /,
            *args: typing.Any,
            **kwargs: typing.Any
        ) -> None:
        super().__init__(args=args, kwargs=types.MappingProxyType(kwargs))

    def __repr__(self) -> str:
        arguments = ', '.join([
            *[repr(arg) for arg in self.args],
            *['{}={!r}'.format(k, v) for k, v in self.kwargs.items()],
        ])
        return '<{} ({})>'.format(type(self).__name__, arguments)

    @property
    def shape(self) -> str:
        """
        The call shape without the values, e.g. ``'_, _, add=_'``
        """
        return ', '.join([
            *['_' for _ in self.args],
            *['{}=_'.format(k) for k in self.kwargs],
        ])

