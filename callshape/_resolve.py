from collections import OrderedDict
import typing

from callshape._exceptions import InvariantViolation
from callshape._signature import (
    FUNCTION,
    TUPLE_AGGREGATE,
    CallableKind,
)
from callshape._variant import (
    NAMED,
    CallVariant,
    Slot,
)


def reference_variant(
        matrix: typing.Sequence[CallVariant],
        kind: CallableKind = FUNCTION,
    ) -> CallVariant:
    """
    Get the reference variant of a call variant matrix: its first element.

    For functions and named aggregates the reference names every parameter.
    Tuple aggregates have no named variants; their first variant (every
    field in declaration order) serves as the reference.

    :param matrix: the matrix generated by :func:`~callshape.permute_declaration`
    :param kind: the :class:`~callshape.CallableKind` the matrix was
        generated for
    :raises InvariantViolation: if the matrix is empty, or its first variant
        is not all ``NAMED`` (for functions and named aggregates)
    """
    if not matrix:
        raise InvariantViolation('Call variant matrix has no reference variant')
    reference = matrix[0]
    if kind is not TUPLE_AGGREGATE and \
            any(slot.kind is not NAMED for slot in reference):
        raise InvariantViolation(
            'First variant {} is not the reference variant'.format(reference)
        )
    return reference


def canonical_order(
        reference: CallVariant,
        variant: CallVariant,
    ) -> typing.Tuple[Slot, ...]:
    """
    Reorder the slots of ``variant`` into the order of ``reference``
    (declaration order), matching slots by parameter name. Slots of
    ``variant`` for parameters the reference doesn't have are appended in the
    order they appear in ``variant``.

    Usage::

        >>> a, b = req('a'), dflt('b', 1)
        >>> canonical_order(
        ...     CallVariant([named(a), named(b)]),
        ...     CallVariant([named(b), named(a)]),
        ... )
        (<Slot named "a">, <Slot named "b">)

    :raises InvariantViolation: if ``variant`` has no slot for a parameter of
        ``reference``
    """
    by_name = OrderedDict((slot.name, slot) for slot in variant)
    ordered = []
    for ref in reference:
        try:
            ordered.append(by_name.pop(ref.name))
        except KeyError:
            raise InvariantViolation(
                "Variant {} has no slot for parameter '{}'".\
                format(variant, ref.name)
            ) from None
    ordered.extend(by_name.values())
    return tuple(ordered)
