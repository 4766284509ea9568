from types import MappingProxyType
import typing

from callshape._exceptions import ImmutableInstanceError


def asdict(obj) -> typing.Mapping[str, typing.Any]:
    """
    Read-only mapping of an object's public attributes, drawn from
    ``__dict__`` or, for ``__slots__`` classes, from every slot along the MRO.
    """
    if hasattr(obj, '__dict__'):
        return MappingProxyType({
            k: v for k, v in obj.__dict__.items() if not k.startswith('_')
        })
    slots = [
        name
        for klass in type(obj).__mro__
        for name in getattr(klass, '__slots__', ())
        if not name.startswith('_')
    ]
    return MappingProxyType({k: getattr(obj, k) for k in slots})


def replace(obj, **changes):
    """
    Return a new object replacing specified fields with new values.

    Usage::

        class Klass(Immutable):
            __slots__ = ('value',)
            def __init__(self, value):
                super().__init__(value=value)

        k1 = Klass(1)
        k2 = replace(k1, value=2)
        assert (k1.value, k2.value) == (1, 2)
    """
    return type(obj)(**dict(asdict(obj), **changes))


class Immutable:
    """
    A ``__slots__`` base class whose attributes are set once, in
    ``__init__``, and can't be re-assigned afterwards.
    """
    __slots__ = ()

    def __init__(self, **kwargs: typing.Any) -> None:
        for k, v in kwargs.items():
            object.__setattr__(self, k, v)

    def __eq__(self, other: typing.Any) -> bool:
        if not isinstance(other, type(self)):
            return False
        return asdict(other) == asdict(self)

    def __setattr__(self, key: str, value: typing.Any) -> None:
        raise ImmutableInstanceError("cannot assign to field '{}'".format(key))
