"""
Generation of call variants.

The matrix produced for a function with ``n`` required and ``m`` defaulted
parameters grows factorially with the number of parameters that may be named
together and exponentially with ``m``: four required and two defaulted
parameters give 173 variants, and nine defaulted parameters alone give
over a million. The growth is the size of the call set being described and
is never truncated; use :func:`~callshape.set_max_parameters` to refuse
large declarations up front.
"""
import itertools
import logging
import typing

from callshape._config import (
    get_max_parameters,
    get_warn_threshold,
)
from callshape._exceptions import (
    InvariantViolation,
    LimitExceededError,
)
from callshape._parameter import (
    Parameter,
    split_parameters,
    validate,
)
from callshape._signature import (
    NAMED_AGGREGATE,
    TUPLE_AGGREGATE,
    Declaration,
)
from callshape._variant import (
    DEFAULT_OMITTED,
    NAMED,
    POSITIONAL,
    CallVariant,
    named,
    omitted,
    positional,
)

logger = logging.getLogger(__name__)

_TYPE_PARAMETERS = typing.Sequence[Parameter]


def permute_named(parameters: _TYPE_PARAMETERS) -> typing.List[CallVariant]:
    """
    Every ordering of the parameters, each parameter ``NAMED``.
    The first ordering is the declaration order; an empty input yields a
    single empty variant.
    """
    return [
        CallVariant(named(param) for param in ordering)
        for ordering in itertools.permutations(parameters)
    ]


def permute_required(parameters: _TYPE_PARAMETERS) -> typing.List[CallVariant]:
    """
    For every split point ``k``, the first ``k`` parameters supplied
    positionally (in declaration order) followed by every ordering of the
    remaining parameters as ``NAMED``.

    The last variant is always the all-positional one.
    """
    variants = []
    for k in range(len(parameters) + 1):
        prefix = CallVariant(positional(param) for param in parameters[:k])
        variants.extend(
            prefix + suffix for suffix in permute_named(parameters[k:])
        )
    return variants


def permute_named_defaults(
        parameters: _TYPE_PARAMETERS,
    ) -> typing.List[CallVariant]:
    """
    For every subset of the defaulted parameters, every ordering of the
    subset as ``NAMED`` followed by the rest of the parameters as
    ``DEFAULT_OMITTED`` (in declaration order).

    Subsets are visited from the full subset down to the empty one, so the
    first variant names every parameter in declaration order. Zero-length
    variants (no parameters at all) are dropped.
    """
    variants = []
    for mask in range((1 << len(parameters)) - 1, -1, -1):
        used = [
            param for i, param in enumerate(parameters) if (mask >> i) & 1
        ]
        unused = CallVariant(
            omitted(param)
            for i, param in enumerate(parameters)
            if not (mask >> i) & 1
        )
        variants.extend(used_ + unused for used_ in permute_named(used))
    return [variant for variant in variants if variant]


def permute_positional_defaults(
        parameters: _TYPE_PARAMETERS,
    ) -> typing.List[CallVariant]:
    """
    For every prefix length ``p`` from ``1``, the first ``p`` defaulted
    parameters supplied positionally (never reordered), followed by
    :func:`permute_named_defaults` of the remainder.
    """
    variants = []
    for p in range(1, len(parameters) + 1):
        prefix = CallVariant(positional(param) for param in parameters[:p])
        remainder = parameters[p:]
        if not remainder:
            variants.append(prefix)
            continue
        variants.extend(
            prefix + suffix for suffix in permute_named_defaults(remainder)
        )
    return variants


def check_limit(count: int) -> None:
    """
    Refuse to permute more parameters than the configured ceiling.

    :raises LimitExceededError: if ``count`` exceeds
        :func:`~callshape.get_max_parameters`
    """
    limit = get_max_parameters()
    if limit is not None and count > limit:
        raise LimitExceededError(
            'Refusing to permute {} parameters (limit is {})'.\
            format(count, limit)
        )


def permute(
        required: _TYPE_PARAMETERS,
        defaulted: _TYPE_PARAMETERS,
    ) -> typing.List[CallVariant]:
    """
    Generate the call variant matrix of a function.

    The matrix is every required-parameter variant (positional prefix, then
    named in any order) combined with every defaulted-parameter variant
    (named in any order, or omitted), followed by the all-positional
    required variant combined with every positional-prefix variant of the
    defaulted parameters.

    The first variant is the reference variant: every parameter ``NAMED``,
    in declaration order.

    :param required: the required parameters, in declaration order
    :param defaulted: the defaulted parameters, in declaration order
    :raises LimitExceededError: if a parameter ceiling is configured and
        exceeded
    :return: the ordered list of :class:`~callshape.CallVariant`
    """
    check_limit(len(required) + len(defaulted))

    required_variants = permute_required(required)
    default_variants = permute_named_defaults(defaulted)

    all_positional = required_variants[-1]
    if any(slot.kind is not POSITIONAL for slot in all_positional):
        raise InvariantViolation(
            'Last required variant {} is not all positional'.\
            format(all_positional)
        )

    if default_variants:
        matrix = [
            head + tail
            for head in required_variants
            for tail in default_variants
        ]
    else:
        matrix = required_variants

    matrix.extend(
        all_positional + tail
        for tail in permute_positional_defaults(defaulted)
    )

    reference = matrix[0]
    if reference.kinds != (NAMED,) * len(reference) or \
            reference.names != tuple(p.name for p in (*required, *defaulted)):
        raise InvariantViolation(
            'First variant {} is not the reference variant'.format(reference)
        )

    logger.debug(
        'Permuted %d required and %d defaulted parameters into %d variants',
        len(required),
        len(defaulted),
        len(matrix),
    )
    if len(matrix) > get_warn_threshold():
        logger.warning(
            'Generated %d call variants for %d parameters',
            len(matrix),
            len(required) + len(defaulted),
        )
    return matrix


def permute_tuple(
        required: _TYPE_PARAMETERS,
        defaulted: _TYPE_PARAMETERS,
    ) -> typing.List[CallVariant]:
    """
    Generate the call variant matrix of a tuple-like record, which only
    accepts positional fields: every required field, then ``0`` to ``m``
    defaulted fields, the rest omitted. Ordered by increasing prefix length.
    """
    head = CallVariant(positional(param) for param in required)
    return [
        head + CallVariant([
            *(positional(param) for param in defaulted[:p]),
            *(omitted(param) for param in defaulted[p:]),
        ])
        for p in range(len(defaulted) + 1)
    ]


def permute_declaration(declaration: Declaration) -> typing.List[CallVariant]:
    """
    Validate a :class:`~callshape.Declaration` and generate its call variant
    matrix, using the family that matches its
    :class:`~callshape.CallableKind`. Variants of a named aggregate that
    omit a field end with the rest marker.

    :raises ParameterOrderError: if a required parameter follows a defaulted
        parameter
    """
    validate(declaration.parameters)
    required, defaulted = split_parameters(declaration.parameters)

    if declaration.kind is TUPLE_AGGREGATE:
        return permute_tuple(required, defaulted)

    matrix = permute(required, defaulted)
    if declaration.kind is NAMED_AGGREGATE:
        matrix = [
            variant.with_rest() if variant.select(DEFAULT_OMITTED) else variant
            for variant in matrix
        ]
    return matrix
