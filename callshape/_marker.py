import inspect
import typing

# pylint: disable=C0103, invalid-name

T = typing.TypeVar('T')

class MarkerMeta(type):
    """
    A metaclass that creates singletons by overriding `__call__`.

    Usage::

        >>> class Marker(metaclass=MarkerMeta):
        ...     pass
        ...
        >>> assert Marker() is Marker
    """
    def __call__(cls: T, *args, **kwargs) -> T:
        """
        Returns the class itself; does not generate a new class. The class's
        ``__new__`` method is not called.
        """
        return cls

    def __repr__(cls) -> str:
        return '<{}>'.format(cls.__name__)

    def __bool__(cls) -> bool:
        return False


class empty(metaclass=MarkerMeta):
    """
    A simple :class:`~callshape._marker.MarkerMeta` class denoting that a
    parameter has no default (i.e. it is *required*) or no type annotation.
    Used in place of :class:`inspect.Parameter.empty` as that is not repr'd
    (providing confusing usage).

    :ivar native: local storage of :class:`inspect.Parameter.empty`
    """
    native = inspect.Parameter.empty

    @classmethod
    def ccoerce_synthetic(cls, value):
        """
        Conditionally coerce the value to a
        non-:class:`inspect.Parameter.empty` value.

        :param value: the value to conditionally coerce
        :return: the value, if the value is not an instance of
            :class:`inspect.Paramter.empty`, otherwise return
            :class:`~callshape.empty`
        """
        return value if value is not cls.native else cls


class zero(metaclass=MarkerMeta):
    """
    A :class:`~callshape._marker.MarkerMeta` class used as a default value to
    request the *zero value* of the parameter's type, i.e. the result of
    calling the annotation with no arguments (``int()``, ``list()``, ...).

    Usage::

        def connect(host: str, port: int = 8080, retries: int = zero):
            ...
    """
    pass


class rest(metaclass=MarkerMeta):
    """
    A :class:`~callshape._marker.MarkerMeta` class that stands for the trailing
    *rest* token of a named-aggregate acceptor pattern: every field that was
    not named takes its default.
    """
    token = '...'
