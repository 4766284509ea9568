import functools
import inspect
import logging
import typing

from callshape._exceptions import NoMatchError
import callshape._immutable as immutable
from callshape._marker import rest
from callshape._parameter import Factory
from callshape._permute import permute_declaration
from callshape._resolve import (
    canonical_order,
    reference_variant,
)
from callshape._signature import (
    Declaration,
    declaration,
)
from callshape._utils import CallArguments
from callshape._variant import (
    NAMED,
    POSITIONAL,
    CallVariant,
    Slot,
)

logger = logging.getLogger(__name__)


class AcceptorPattern(immutable.Immutable):
    """
    The call syntax accepted by one :class:`~callshape.DispatchRule`: the
    parameters supplied by position, then the parameters supplied by name (in
    the order the caller writes them), then an optional rest marker.

    The rest marker only documents that the remaining fields of a named
    aggregate take their defaults; a Python call has no token for it, so it
    plays no part in :meth:`~callshape.AcceptorPattern.matches`.

    :param positional: names of the parameters supplied by position
    :param named: names of the parameters supplied by keyword, in order
    :param rest: whether the pattern ends with the rest marker
    """
    __slots__ = ('positional', 'named', 'rest')

    def __init__(
            self,
            positional: typing.Iterable[str] = (),
            named: typing.Iterable[str] = (),
            rest: bool = False
        ) -> None:
        # pylint: disable=W0621, redefined-outer-name
        super().__init__(
            positional=tuple(positional),
            named=tuple(named),
            rest=rest,
        )

    def __str__(self) -> str:
        tokens = [
            *self.positional,
            *['{}='.format(name) for name in self.named],
        ]
        if self.rest:
            tokens.append(rest.token)
        return '({})'.format(', '.join(tokens))

    def __repr__(self) -> str:
        return '<{} {}>'.format(type(self).__name__, self)

    @classmethod
    def from_variant(cls, variant: CallVariant) -> 'AcceptorPattern':
        return cls(
            positional=[slot.name for slot in variant.select(POSITIONAL)],
            named=[slot.name for slot in variant.select(NAMED)],
            rest=variant.rest,
        )

    def matches(self, arguments: CallArguments) -> bool:
        """
        Whether a call supplies exactly the positional arguments and, in the
        same order, the keyword arguments of this pattern.
        """
        return len(arguments.args) == len(self.positional) and \
            tuple(arguments.kwargs) == self.named


class DispatchRule(immutable.Immutable):
    """
    One entry of a :class:`~callshape.DispatchTable`: an
    :class:`~callshape.AcceptorPattern` and the canonical call it resolves
    to.

    :param pattern: the :class:`~callshape.AcceptorPattern` of the rule
    :param call: one :class:`~callshape.Slot` per parameter, in declaration
        order; each says where the argument for that parameter comes from
    """
    __slots__ = ('pattern', 'call')

    def __init__(
            self,
            pattern: AcceptorPattern,
            call: typing.Iterable[Slot]
        ) -> None:
        super().__init__(pattern=pattern, call=tuple(call))

    def __repr__(self) -> str:
        return '<{} {} => ({})>'.format(
            type(self).__name__,
            self.pattern,
            ', '.join(self.sources()),
        )

    @classmethod
    def from_variant(
            cls,
            reference: CallVariant,
            variant: CallVariant,
        ) -> 'DispatchRule':
        return cls(
            AcceptorPattern.from_variant(variant),
            canonical_order(reference, variant),
        )

    def build(self, arguments: CallArguments) -> CallArguments:
        """
        Build the fully positional arguments for the callable from a call
        that matches :paramref:`~callshape.DispatchRule.pattern`.
        Omitted parameters take their default, evaluated now.
        """
        positions = {name: i for i, name in enumerate(self.pattern.positional)}
        values = []
        for slot in self.call:
            if slot.kind is POSITIONAL:
                values.append(arguments.args[positions[slot.name]])
            elif slot.kind is NAMED:
                values.append(arguments.kwargs[slot.name])
            else:
                values.append(slot.parameter.apply_default())
        return CallArguments(*values)

    def sources(
            self,
            args: str = 'args',
            kwargs: str = 'kwargs',
            path: typing.Optional[str] = None,
            module: typing.Optional[str] = None,
        ) -> typing.List[str]:
        """
        The canonical call as Python expressions, one per parameter, reading
        from variables named ``args`` and ``kwargs``.

        Default factories defined in ``module`` are prefixed with ``path``,
        so they are reachable wherever the target is.
        """
        # pylint: disable=W0621, redefined-outer-name
        positions = {name: i for i, name in enumerate(self.pattern.positional)}
        expressions = []
        for slot in self.call:
            if slot.kind is POSITIONAL:
                expressions.append(
                    '{}[{}]'.format(args, positions[slot.name])
                )
            elif slot.kind is NAMED:
                expressions.append('{}[{!r}]'.format(kwargs, slot.name))
            else:
                source = slot.parameter.default_source
                default = slot.parameter.default
                if path and module is not None and \
                        isinstance(default, Factory) and \
                        getattr(default.factory, '__module__', None) == module:
                    source = '{}.{}'.format(path, source)
                expressions.append(source)
        return expressions


class DispatchTable(immutable.Immutable):
    """
    An ordered table of :class:`~callshape.DispatchRule` for one
    :class:`~callshape.Declaration`. Rules are tried in order; the first
    whose pattern matches the call builds the arguments of the canonical
    call. A call that matches no rule raises
    :class:`~callshape.NoMatchError`.

    .. note::

        Use :func:`~callshape.build_table` to create a table from a
        :class:`~callshape.Declaration`.

    :param declaration: the :class:`~callshape.Declaration` of the callable
    :param rules: the rules, in the order they are tried
    """
    __slots__ = ('declaration', 'rules')

    def __init__(
            self,
            declaration: Declaration,
            rules: typing.Iterable[DispatchRule]
        ) -> None:
        # pylint: disable=W0621, redefined-outer-name
        super().__init__(declaration=declaration, rules=tuple(rules))

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> typing.Iterator[DispatchRule]:
        return iter(self.rules)

    def __repr__(self) -> str:
        return '<{} {} ({} rules)>'.format(
            type(self).__name__,
            self.declaration,
            len(self.rules),
        )

    def __call__(
            self,
            /,
            *args: typing.Any,
            **kwargs: typing.Any
        ) -> typing.Any:
        """
        Resolve the call and invoke the declaration's target with the
        canonical, fully positional arguments.
        """
        target = self.declaration.target
        if target is None:
            raise TypeError(
                "Declaration '{}' has no target to call".\
                format(self.declaration.name)
            )
        resolved = self.resolve(*args, **kwargs)
        return target(*resolved.args)

    def match(self, arguments: CallArguments) -> DispatchRule:
        """
        Find the first rule whose pattern matches the call.

        :raises NoMatchError: if no rule matches
        """
        for rule in self.rules:
            if rule.pattern.matches(arguments):
                return rule
        raise NoMatchError(
            '{}() does not accept the call ({})'.format(
                self.declaration.name,
                arguments.shape,
            )
        )

    def resolve(
            self,
            /,
            *args: typing.Any,
            **kwargs: typing.Any
        ) -> CallArguments:
        """
        Map a call onto the canonical call of the first matching rule.

        :raises NoMatchError: if no rule matches
        :return: the fully positional
            :class:`~callshape._utils.CallArguments` for the target
        """
        arguments = CallArguments(*args, **kwargs)
        return self.match(arguments).build(arguments)

    def describe(self) -> str:
        """
        Documentation for the dispatcher: one line per parameter.
        """
        return '\n'.join(
            param.describe() for param in self.declaration.parameters
        )


def build_table(declaration: Declaration) -> DispatchTable:
    """
    Generate the :class:`~callshape.DispatchTable` of a
    :class:`~callshape.Declaration`: validate it, permute its call variants,
    and resolve each variant against the reference variant.

    :raises ParameterOrderError: if a required parameter follows a defaulted
        parameter
    """
    # pylint: disable=W0621, redefined-outer-name
    matrix = permute_declaration(declaration)
    reference = reference_variant(matrix, declaration.kind)
    rules = [DispatchRule.from_variant(reference, variant) for variant in matrix]
    logger.debug(
        'Built dispatch table for %s with %d rules',
        declaration.name,
        len(rules),
    )
    return DispatchTable(declaration, rules)


def _escape_docstring(line: str) -> str:
    return line.replace('\\', '\\\\').replace('"""', '\\"\\"\\"')


def render_source(
        table: DispatchTable,
        path: typing.Optional[str] = None,
        name: typing.Optional[str] = None,
    ) -> str:
    """
    Render a :class:`~callshape.DispatchTable` as the Python source of a
    standalone dispatcher function.

    The dispatcher tries the rules in order and calls the target with the
    canonical, fully positional arguments; a call that matches no rule
    raises :class:`TypeError`. Default expressions are rendered with
    :attr:`~callshape.Parameter.default_source`, so literals must have a
    ``repr`` that evaluates back to them. Factories defined in the target's
    module are prefixed with :paramref:`~callshape.render_source.path`; any
    other factory must be reachable by its qualified name where the source
    is executed.

    :param table: the table to render
    :param path: the dotted prefix under which the target is reachable from
        the module that will hold the source (e.g. ``'pkg.shapes'``); the
        bare target name if ``None``
    :param name: the name of the dispatcher function; defaults to
        ``dispatch_<target name>``
    :raises ValueError: if a default can't be rendered as an expression
    :return: the source code of the dispatcher function
    """
    decl = table.declaration
    target = '{}.{}'.format(path, decl.name) if path else decl.name
    name = name or 'dispatch_{}'.format(decl.name)
    module = getattr(decl.target, '__module__', None)

    lines = ['def {}(*args, **kwargs):'.format(name)]
    description = table.describe()
    if description:
        lines.append('    """')
        lines.extend(
            '    {}'.format(_escape_docstring(line))
            for line in description.splitlines()
        )
        lines.append('    """')
    lines.append('    names = tuple(kwargs)')

    for rule in table.rules:
        lines.append('    # {}'.format(rule.pattern))
        lines.append('    if len(args) == {} and names == {!r}:'.format(
            len(rule.pattern.positional),
            rule.pattern.named,
        ))
        lines.append('        return {}({})'.format(
            target,
            ', '.join(rule.sources(path=path, module=module)),
        ))

    lines.append('    raise TypeError({!r})'.format(
        '{}() does not accept the supplied arguments'.format(decl.name)
    ))
    return '\n'.join(lines) + '\n'


def dispatch(
        callable: typing.Callable[..., typing.Any],
    ) -> typing.Callable[..., typing.Any]:
    """
    Wrap a callable with a dispatcher that accepts any legal mix of
    positional, named and omitted arguments, and calls the original with
    fully positional arguments.

    Usage::

        @callshape.dispatch
        def complex_function(lhs, rhs, add=True, divide_result_by=None):
            ...

        complex_function(10, 5)
        complex_function(rhs=5, lhs=10, divide_result_by=2, add=False)

    The :class:`~callshape.DispatchTable` is available as ``__dispatch__``,
    and the original callable as ``__wrapped__``. Coroutine functions are
    wrapped with a coroutine function. Dataclasses and named tuples are
    wrapped with a constructor function.

    :param callable: a function, dataclass or named tuple
    :return: the dispatching wrapper
    """
    # pylint: disable=W0622, redefined-builtin
    table = build_table(declaration(callable))
    updated = () if inspect.isclass(callable) else functools.WRAPPER_UPDATES

    if inspect.iscoroutinefunction(callable):
        @functools.wraps(callable, updated=updated)
        async def inner(*args, **kwargs):
            # pylint: disable=E1102, not-callable
            mapped = inner.__dispatch__.resolve(*args, **kwargs)
            return await callable(*mapped.args)
    else:
        @functools.wraps(callable, updated=updated)
        def inner(*args, **kwargs):
            # pylint: disable=E1102, not-callable
            mapped = inner.__dispatch__.resolve(*args, **kwargs)
            return callable(*mapped.args)

    inner.__dispatch__ = table  # type: ignore
    return inner
