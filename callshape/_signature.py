import builtins
import dataclasses
import enum
import inspect
import typing

import callshape._immutable as immutable
from callshape._marker import empty
from callshape._parameter import (
    Parameter,
    split_parameters,
)


class CallableKind(enum.Enum):
    """
    The kind of declaration a parameter list was taken from, which decides
    the family of call variants generated for it.
    """
    FUNCTION = 'function'
    NAMED_AGGREGATE = 'named-aggregate'
    TUPLE_AGGREGATE = 'tuple-aggregate'


FUNCTION = CallableKind.FUNCTION
NAMED_AGGREGATE = CallableKind.NAMED_AGGREGATE
TUPLE_AGGREGATE = CallableKind.TUPLE_AGGREGATE

_UNSUPPORTED_KINDS = {
    inspect.Parameter.VAR_POSITIONAL: 'variable positional',
    inspect.Parameter.KEYWORD_ONLY: 'keyword only',
    inspect.Parameter.VAR_KEYWORD: 'variable keyword',
}


def _type_hints(callable: typing.Any) -> typing.Dict[str, typing.Any]:
    """
    Resolved annotations of a function, method, class or callable instance.
    Annotations that can't be resolved (e.g. forward references to names that
    don't exist) leave the raw annotations in place.
    """
    # pylint: disable=W0622, redefined-builtin
    if not (inspect.isclass(callable) or inspect.isroutine(callable)):
        callable = getattr(callable, '__call__', callable)
    try:
        return typing.get_type_hints(callable)
    except (NameError, TypeError):
        return {}


class Declaration(immutable.Immutable):
    """
    An immutable, parsed declaration of a callable: its name, its
    :class:`~callshape.CallableKind` and its ordered
    :class:`~callshape.Parameter` list.

    Parameter names must be unique. The order of required and defaulted
    parameters is *not* checked here; see :func:`~callshape.validate`.

    .. note::

        Use :func:`~callshape.declaration` (or
        :meth:`~callshape.Declaration.from_callable`) to build a
        :class:`~callshape.Declaration` from a Python callable.

    :param name: the name of the callable
    :param parameters: the ordered parameters of the callable
    :param kind: the :class:`~callshape.CallableKind` of the callable
    :param target: the callable itself (optional; required to dispatch calls)
    """
    __slots__ = ('name', 'kind', 'parameters', 'target')

    def __init__(
            self,
            name: str,
            parameters: typing.Iterable[Parameter] = (),
            kind: CallableKind = FUNCTION,
            target: typing.Optional[typing.Callable[..., typing.Any]] = None
        ) -> None:
        parameters = tuple(parameters)
        names = set()  # type: typing.Set[str]
        for param in parameters:
            if not isinstance(param, Parameter):
                raise TypeError("Received non-Parameter '{}'".format(param))
            if param.name in names:
                raise ValueError(
                    "Received multiple parameters with name '{}'".\
                    format(param.name)
                )
            names.add(param.name)

        if not isinstance(kind, CallableKind):
            raise TypeError("Received non-CallableKind '{}'".format(kind))

        super().__init__(
            name=name,
            kind=kind,
            parameters=parameters,
            target=target,
        )

    def __str__(self) -> str:
        return '{}({})'.format(
            self.name,
            ', '.join(str(param) for param in self.parameters),
        )

    def __repr__(self) -> str:
        return '<{} {} {}>'.format(type(self).__name__, self.kind.value, self)

    @property
    def required(self) -> typing.Tuple[Parameter, ...]:
        return split_parameters(self.parameters)[0]

    @property
    def defaulted(self) -> typing.Tuple[Parameter, ...]:
        return split_parameters(self.parameters)[1]

    @classmethod
    def from_callable(
            cls,
            callable: typing.Callable[..., typing.Any],
        ) -> 'Declaration':
        """
        A factory method that creates an instance of
        :class:`~callshape.Declaration` from a Python callable:

        - a dataclass is a :attr:`~callshape.CallableKind.NAMED_AGGREGATE` \
        over its ``__init__`` fields,
        - a named tuple (``collections.namedtuple`` or \
        ``typing.NamedTuple``) is a \
        :attr:`~callshape.CallableKind.TUPLE_AGGREGATE`,
        - anything else callable is a \
        :attr:`~callshape.CallableKind.FUNCTION`, built from \
        :func:`inspect.signature`.

        A default of :class:`~callshape.zero` requests the zero value of the
        parameter's annotation.

        :param callable: the callable to parse
        :raises TypeError: if the callable (or one of its parameters) can't
            be expressed as a positional call
        :return: the parsed :class:`~callshape.Declaration`
        """
        # pylint: disable=W0622, redefined-builtin
        if inspect.isclass(callable):
            if dataclasses.is_dataclass(callable):
                return cls._from_dataclass(callable)
            elif issubclass(callable, tuple) and hasattr(callable, '_fields'):
                return cls._from_namedtuple(callable)
            raise TypeError(
                "Unsupported class '{}'; expected a dataclass or a named tuple".\
                format(callable.__qualname__)
            )

        if not builtins.callable(callable):
            raise TypeError('{} is not callable'.format(callable))

        hints = _type_hints(callable)
        parameters = []
        for native in inspect.signature(callable).parameters.values():
            if native.kind in _UNSUPPORTED_KINDS:
                raise TypeError(
                    "Unsupported {} parameter '{}'".format(
                        _UNSUPPORTED_KINDS[native.kind],
                        native.name,
                    )
                )
            parameters.append(Parameter(
                native.name,
                type=hints.get(
                    native.name,
                    empty.ccoerce_synthetic(native.annotation),
                ),
                default=empty.ccoerce_synthetic(native.default),
            ))

        return cls(
            getattr(callable, '__name__', type(callable).__name__),
            parameters,
            FUNCTION,
            callable,
        )

    @classmethod
    def _from_dataclass(cls, klass: type) -> 'Declaration':
        hints = _type_hints(klass)
        parameters = []
        for field in dataclasses.fields(klass):
            if not field.init:
                continue
            type_ = hints.get(field.name, field.type)
            if getattr(field, 'kw_only', False):
                raise TypeError(
                    "Unsupported keyword only field '{}'".format(field.name)
                )

            if field.default_factory is not dataclasses.MISSING:
                param = Parameter(
                    field.name,
                    type=type_,
                    factory=field.default_factory,
                )
            elif field.default is not dataclasses.MISSING:
                param = Parameter(
                    field.name,
                    type=type_,
                    default=field.default,
                )
            else:
                param = Parameter(field.name, type=type_)
            parameters.append(param)

        return cls(klass.__name__, parameters, NAMED_AGGREGATE, klass)

    @classmethod
    def _from_namedtuple(cls, klass: type) -> 'Declaration':
        annotations = _type_hints(klass) or \
            getattr(klass, '__annotations__', {})
        defaults = getattr(klass, '_field_defaults', {})
        parameters = [
            Parameter(
                name,
                type=annotations.get(name, empty),
                default=defaults.get(name, empty),
            )
            for name in klass._fields
        ]
        return cls(klass.__name__, parameters, TUPLE_AGGREGATE, klass)


def declaration(callable: typing.Callable[..., typing.Any]) -> Declaration:
    """
    Parse a Python callable into a :class:`~callshape.Declaration`.
    See :meth:`~callshape.Declaration.from_callable`.
    """
    # pylint: disable=W0622, redefined-builtin
    return Declaration.from_callable(callable)
