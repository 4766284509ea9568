import pytest

from callshape._parameter import dflt, req
from callshape._variant import (
    DEFAULT_OMITTED,
    NAMED,
    POSITIONAL,
    CallVariant,
    Slot,
    SlotKind,
    named,
    omitted,
    positional,
)

# pylint: disable=C0103, invalid-name
# pylint: disable=R0201, no-self-use

a = req('a')
b = req('b')
c = dflt('c', 1)


class TestSlot:
    @pytest.mark.parametrize(('factory', 'kind'), [
        pytest.param(positional, POSITIONAL, id='positional'),
        pytest.param(named, NAMED, id='named'),
        pytest.param(omitted, DEFAULT_OMITTED, id='omitted'),
    ])
    def test_constructors(self, factory, kind):
        """
        Ensure the constructor functions set the slot kind.
        """
        slot = factory(c)
        assert slot.kind is kind
        assert slot.parameter is c
        assert slot.name == 'c'

    def test__init__bad_kind_raises(self):
        """
        Ensure the kind must be a ``SlotKind``.
        """
        with pytest.raises(TypeError) as excinfo:
            Slot('named', a)
        assert excinfo.value.args[0] == "Received non-SlotKind 'named'"

    def test__init__omit_required_raises(self):
        """
        Ensure a required parameter can't be omitted.
        """
        with pytest.raises(TypeError) as excinfo:
            omitted(a)
        assert excinfo.value.args[0] == \
            "Required parameter 'a' cannot be omitted"

    @pytest.mark.parametrize(('slot', 'expected_str', 'expected_repr'), [
        pytest.param(positional(c), 'c', '<Slot positional "c">', id='positional'),
        pytest.param(named(c), 'c=', '<Slot named "c">', id='named'),
        pytest.param(
            omitted(c),
            '[c]',
            '<Slot default-omitted "c">',
            id='omitted',
        ),
    ])
    def test__str__and__repr__(self, slot, expected_str, expected_repr):
        """
        Ensure pretty printing for ``Slot``
        """
        assert str(slot) == expected_str
        assert repr(slot) == expected_repr

    @pytest.mark.parametrize(('other', 'eq'), [
        pytest.param(named(req('c')), True, id='same_name'),
        pytest.param(positional(c), False, id='different_kind'),
        pytest.param(named(a), False, id='different_name'),
        pytest.param('c=', False, id='non_slot'),
    ])
    def test__eq__(self, other, eq):
        """
        Ensure slots compare by kind and parameter name.
        """
        assert (named(c) == other) == eq

    def test__hash__(self):
        """
        Ensure equal slots hash equally.
        """
        assert len({named(c), named(dflt('c', 2)), positional(c)}) == 2


class TestCallVariant:
    def test_sequence(self):
        """
        Ensure a variant is a sequence of its slots.
        """
        variant = CallVariant([positional(a), named(b), omitted(c)])
        assert len(variant) == 3
        assert variant[1] == named(b)
        assert list(variant) == [positional(a), named(b), omitted(c)]
        assert named(b) in variant
        assert not variant.rest

    def test_empty(self):
        """
        Ensure an empty variant is falsy.
        """
        assert not CallVariant()

    def test__add__(self):
        """
        Ensure variants concatenate, keeping the rest marker of either side.
        """
        head = CallVariant([positional(a)])
        tail = CallVariant([omitted(c)], rest=True)
        joined = head + tail
        assert joined == CallVariant([positional(a), omitted(c)], rest=True)

    def test__add__non_variant(self):
        """
        Ensure concatenating a non-variant raises.
        """
        with pytest.raises(TypeError):
            # pylint: disable=W0106, expression-not-assigned
            CallVariant() + (named(a),)

    @pytest.mark.parametrize(('variant', 'expected'), [
        pytest.param(CallVariant(), '()', id='empty'),
        pytest.param(
            CallVariant([positional(a), named(b), omitted(c)]),
            '(a, b=, [c])',
            id='mixed',
        ),
        pytest.param(
            CallVariant([named(a), omitted(c)], rest=True),
            '(a=, [c], ...)',
            id='rest',
        ),
    ])
    def test__str__and__repr__(self, variant, expected):
        """
        Ensure pretty printing for ``CallVariant``
        """
        assert str(variant) == expected
        assert repr(variant) == '<CallVariant {}>'.format(expected)

    @pytest.mark.parametrize(('v1', 'v2', 'eq'), [
        pytest.param(
            CallVariant([named(a), named(b)]),
            CallVariant([named(a), named(b)]),
            True,
            id='eq',
        ),
        pytest.param(
            CallVariant([named(a), named(b)]),
            CallVariant([named(b), named(a)]),
            False,
            id='order',
        ),
        pytest.param(
            CallVariant([named(a)]),
            CallVariant([named(a)], rest=True),
            False,
            id='rest',
        ),
    ])
    def test__eq__and__hash__(self, v1, v2, eq):
        """
        Ensure variants compare (and hash) by slots and rest marker.
        """
        assert (v1 == v2) == eq
        assert (hash(v1) == hash(v2)) == eq

    def test_kinds_and_names(self):
        """
        Ensure ``kinds`` and ``names`` project the slots.
        """
        variant = CallVariant([positional(a), named(b), omitted(c)])
        assert variant.kinds == (POSITIONAL, NAMED, DEFAULT_OMITTED)
        assert variant.names == ('a', 'b', 'c')

    def test_select(self):
        """
        Ensure ``select`` filters slots by kind, in order.
        """
        variant = CallVariant([named(b), named(a), omitted(c)])
        assert variant.select(NAMED) == (named(b), named(a))
        assert variant.select(POSITIONAL) == ()

    def test_with_rest(self):
        """
        Ensure ``with_rest`` produces a copy with the rest marker set.
        """
        variant = CallVariant([named(a)])
        marked = variant.with_rest()
        assert marked.rest
        assert not variant.rest
        assert marked.slots == variant.slots
        assert not marked.with_rest(False).rest

    def test_slot_kind_values(self):
        """
        Ensure the ``SlotKind`` values are stable.
        """
        assert [kind.value for kind in SlotKind] == \
            ['positional', 'named', 'default-omitted']
