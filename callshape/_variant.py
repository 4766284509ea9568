import collections.abc
import enum
import typing

import callshape._immutable as immutable
from callshape._marker import rest
from callshape._parameter import Parameter


class SlotKind(enum.Enum):
    """
    How a parameter's value reaches the callable within one call variant
    """
    POSITIONAL = 'positional'
    NAMED = 'named'
    DEFAULT_OMITTED = 'default-omitted'


POSITIONAL = SlotKind.POSITIONAL
NAMED = SlotKind.NAMED
DEFAULT_OMITTED = SlotKind.DEFAULT_OMITTED


class Slot(immutable.Immutable):
    """
    A single parameter's role within one :class:`~callshape.CallVariant`.

    Slots compare equal when their :paramref:`~callshape.Slot.kind` and the
    name of their :paramref:`~callshape.Slot.parameter` are equal.

    :param kind: the :class:`~callshape.SlotKind` of the slot
    :param parameter: the :class:`~callshape.Parameter` filling the slot
    """
    __slots__ = ('kind', 'parameter')

    def __init__(self, kind: SlotKind, parameter: Parameter) -> None:
        if not isinstance(kind, SlotKind):
            raise TypeError("Received non-SlotKind '{}'".format(kind))
        if kind is DEFAULT_OMITTED and not parameter.has_default:
            raise TypeError(
                "Required parameter '{}' cannot be omitted".\
                format(parameter.name)
            )
        super().__init__(kind=kind, parameter=parameter)

    def __eq__(self, other: typing.Any) -> bool:
        if not isinstance(other, Slot):
            return False
        return (self.kind, self.name) == (other.kind, other.name)

    def __hash__(self) -> int:
        return hash((self.kind, self.name))

    def __str__(self) -> str:
        if self.kind is POSITIONAL:
            return self.name
        elif self.kind is NAMED:
            return '{}='.format(self.name)
        return '[{}]'.format(self.name)

    def __repr__(self) -> str:
        return '<{} {} "{}">'.format(
            type(self).__name__,
            self.kind.value,
            self.name,
        )

    @property
    def name(self) -> str:
        return self.parameter.name


def positional(parameter: Parameter) -> Slot:
    return Slot(POSITIONAL, parameter)


def named(parameter: Parameter) -> Slot:
    return Slot(NAMED, parameter)


def omitted(parameter: Parameter) -> Slot:
    return Slot(DEFAULT_OMITTED, parameter)


class CallVariant(immutable.Immutable, collections.abc.Sequence):
    """
    One fully slot-typed shape of an acceptable invocation: an ordered
    sequence of :class:`~callshape.Slot`, in the order the caller writes
    the arguments (positional first, then named, omitted defaults last).

    Implements :class:`collections.abc.Sequence` over its slots.

    :param slots: the slots of the variant
    :param rest: whether the acceptor pattern ends with the rest marker
        (only for named aggregates with omitted fields)
    """
    # pylint: disable=R0901, too-many-ancestors
    __slots__ = ('slots', 'rest')

    def __init__(
            self,
            slots: typing.Iterable[Slot] = (),
            rest: bool = False
        ) -> None:
        # pylint: disable=W0621, redefined-outer-name
        super().__init__(slots=tuple(slots), rest=rest)

    def __getitem__(self, index):
        return self.slots[index]

    def __len__(self) -> int:
        return len(self.slots)

    def __add__(self, other: 'CallVariant') -> 'CallVariant':
        if not isinstance(other, CallVariant):
            return NotImplemented
        return CallVariant(self.slots + other.slots, self.rest or other.rest)

    def __hash__(self) -> int:
        return hash((self.slots, self.rest))

    def __str__(self) -> str:
        tokens = [str(slot) for slot in self.slots]
        if self.rest:
            tokens.append(rest.token)
        return '({})'.format(', '.join(tokens))

    def __repr__(self) -> str:
        return '<{} {}>'.format(type(self).__name__, self)

    @property
    def kinds(self) -> typing.Tuple[SlotKind, ...]:
        return tuple(slot.kind for slot in self.slots)

    @property
    def names(self) -> typing.Tuple[str, ...]:
        return tuple(slot.name for slot in self.slots)

    def select(self, kind: SlotKind) -> typing.Tuple[Slot, ...]:
        """
        The slots of the given :class:`~callshape.SlotKind`, in order.
        """
        return tuple(slot for slot in self.slots if slot.kind is kind)

    def with_rest(self, rest: bool = True) -> 'CallVariant':
        # pylint: disable=W0621, redefined-outer-name
        return immutable.replace(self, rest=rest)
