import ast
import inspect
import typing

from callshape._exceptions import ParameterOrderError
import callshape._immutable as immutable
from callshape._marker import (
    empty,
    zero,
)


class Factory(immutable.Immutable):
    """
    A default expression that is evaluated every time the default is needed,
    by calling :paramref:`~callshape.Factory.factory` with no arguments.

    :param factory: a zero-argument callable, typically a type (``int``,
        ``list``) whose result is that type's zero value
    """
    # pylint: disable=R0903, too-few-public-methods
    __slots__ = ('factory',)

    def __init__(self, factory: typing.Callable[[], typing.Any]) -> None:
        if not callable(factory):
            raise TypeError('{} is not callable'.format(factory))
        super().__init__(factory=factory)

    def __repr__(self) -> str:
        return '<{} {}>'.format(type(self).__name__, self.factory.__qualname__)

    def __call__(self) -> typing.Any:
        return self.factory()


# Common type hints for Parameter
_TYPE_P_NAME = str
_TYPE_P_TYPE = typing.Any
_TYPE_P_DEFAULT = typing.Any
_TYPE_P_FACTORY = typing.Callable[[], typing.Any]


class Parameter(immutable.Immutable):
    """
    An immutable representation of one declared input of a callable.

    A parameter is *required* when it has no default, and *defaulted*
    otherwise. The default is either a literal value, or a
    :class:`~callshape.Factory` that produces the value when the caller omits
    the argument.

    Parameters are matched by :paramref:`~callshape.Parameter.name` alone:
    two parameters with the same name compare equal whatever their type or
    default.

    .. note::

        This class doesn't usually need to be invoked directly. Use one of
        the constructor functions instead:

        - :func:`~callshape.req` for a required parameter
        - :func:`~callshape.dflt` for a defaulted parameter

    :param name: the name of the parameter; must be a valid identifier
    :param type: the type annotation of the parameter.
        Required when :paramref:`~callshape.Parameter.default` is
        :class:`~callshape.zero`.
    :param default: the default value for the parameter, or
        :class:`~callshape.zero` to use the zero value of
        :paramref:`~callshape.Parameter.type`.
        Cannot be supplied alongside a ``factory`` argument.
    :param factory: a function that generates a default for the parameter.
        Cannot be supplied alongside a ``default`` argument.
    """

    __slots__ = ('name', 'type', 'default')

    def __init__(
            self,
            name: _TYPE_P_NAME,
            *,
            type: _TYPE_P_TYPE = empty,
            default: _TYPE_P_DEFAULT = empty,
            factory: _TYPE_P_FACTORY = empty
        ) -> None:
        # pylint: disable=W0622, redefined-builtin
        if not isinstance(name, str) or not name.isidentifier():
            raise ValueError("Invalid parameter name '{}'".format(name))

        if factory is not empty:
            if default is not empty:
                raise TypeError(
                    'expected either "default" or "factory", received both'
                )
            default = Factory(factory)
        elif default is zero:
            if type is empty:
                raise TypeError(
                    "Parameter '{}' requests a zero value but has no type".\
                    format(name)
                )
            if not callable(type):
                raise TypeError(
                    "Parameter '{}' requests a zero value but its type {!r} "
                    "is not callable".format(name, type)
                )
            default = Factory(type)

        super().__init__(name=name, type=type, default=default)

    def __eq__(self, other: typing.Any) -> bool:
        if not isinstance(other, Parameter):
            return False
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        annotated = self.name \
            if self.type is empty \
            else '{}:{}'.format(self.name, self.type_name)
        return annotated \
            if self.default is empty \
            else '{}={!r}'.format(annotated, self.default)

    def __repr__(self) -> str:
        return '<{} "{}">'.format(type(self).__name__, str(self))

    @property
    def has_default(self) -> bool:
        """
        Whether the caller may omit this parameter
        """
        return self.default is not empty

    @property
    def default_expression(self) -> typing.Any:
        """
        The :class:`~callshape.Factory` or literal that stands in for an
        omitted argument, or ``None`` for a required parameter.
        """
        return self.default if self.has_default else None

    @property
    def type_name(self) -> str:
        if self.type is empty:
            return '_'
        return self.type.__name__ \
            if inspect.isclass(self.type) \
            else str(self.type)

    @property
    def default_source(self) -> str:
        """
        The default expression as Python source: a call of the factory's
        qualified name, or the ``repr`` of the literal.

        :raises ValueError: if the factory has no importable name
            (e.g. a ``lambda``), or the ``repr`` of the literal is not a
            Python expression (e.g. an ``enum`` member)
        """
        if not self.has_default:
            raise TypeError("Parameter '{}' has no default".format(self.name))
        if isinstance(self.default, Factory):
            qualname = getattr(self.default.factory, '__qualname__', '')
            if not all(part.isidentifier() for part in qualname.split('.')):
                raise ValueError(
                    "Cannot render the default factory of parameter '{}'".\
                    format(self.name)
                )
            return '{}()'.format(qualname)

        source = repr(self.default)
        try:
            ast.parse(source, mode='eval')
        except SyntaxError:
            raise ValueError(
                "Cannot render the default value of parameter '{}'".\
                format(self.name)
            ) from None
        return source

    def apply_default(self) -> typing.Any:
        """
        Return the value that replaces an omitted argument: the result of
        calling the :class:`~callshape.Factory`, or the literal default.

        :raises TypeError: if the parameter is required
        """
        if not self.has_default:
            raise TypeError("Parameter '{}' has no default".format(self.name))
        return self.default() \
            if isinstance(self.default, Factory) \
            else self.default

    def describe(self) -> str:
        """
        A one-line documentation entry for the parameter, e.g.
        ``"`add`: `bool` = `True`"``.
        """
        if not self.has_default:
            return '`{}`: `{}`'.format(self.name, self.type_name)
        try:
            default = self.default_source
        except ValueError:
            default = repr(self.default)
        return '`{}`: `{}` = `{}`'.format(self.name, self.type_name, default)


def req(name: str, type: typing.Any = empty) -> Parameter:
    """
    Create a required :class:`~callshape.Parameter`.

    :param name: see :paramref:`~callshape.Parameter.name`
    :param type: see :paramref:`~callshape.Parameter.type`
    """
    # pylint: disable=W0622, redefined-builtin
    return Parameter(name, type=type)


def dflt(
        name: str,
        default: typing.Any = zero,
        type: typing.Any = empty,
        *,
        factory: typing.Any = empty
    ) -> Parameter:
    """
    Create a defaulted :class:`~callshape.Parameter`. Without a ``default``
    or ``factory``, the zero value of ``type`` is used.

    :param name: see :paramref:`~callshape.Parameter.name`
    :param default: see :paramref:`~callshape.Parameter.default`
    :param type: see :paramref:`~callshape.Parameter.type`
    :param factory: see :paramref:`~callshape.Parameter.factory`
    """
    # pylint: disable=W0622, redefined-builtin
    if factory is not empty and default is zero:
        default = empty
    return Parameter(name, type=type, default=default, factory=factory)


def first_invalid_parameter(
        parameters: typing.Iterable[Parameter],
    ) -> typing.Optional[Parameter]:
    """
    Returns the first required parameter that follows a defaulted parameter,
    or ``None`` if all required parameters precede all defaulted parameters.
    """
    seen_default = False
    for param in parameters:
        if param.has_default:
            seen_default = True
        elif seen_default:
            return param
    return None


def validate(parameters: typing.Iterable[Parameter]) -> None:
    """
    Ensure all required parameters precede all defaulted parameters.

    :raises ParameterOrderError: naming the first required parameter found
        after the first defaulted one
    """
    invalid = first_invalid_parameter(parameters)
    if invalid is not None:
        raise ParameterOrderError(
            "non-default parameter '{}' follows default parameter".\
            format(invalid.name),
            invalid,
        )


def split_parameters(
        parameters: typing.Sequence[Parameter],
    ) -> typing.Tuple[typing.Tuple[Parameter, ...], typing.Tuple[Parameter, ...]]:
    """
    Split a validated parameter list into its required prefix and its
    defaulted suffix.
    """
    index = len(parameters)
    for i, param in enumerate(parameters):
        if param.has_default:
            index = i
            break
    return tuple(parameters[:index]), tuple(parameters[index:])
