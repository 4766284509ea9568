import types

import pytest

from callshape._exceptions import ImmutableInstanceError
from callshape._utils import CallArguments

# pylint: disable=C0103, invalid-name
# pylint: disable=R0201, no-self-use


class TestCallArguments:
    def test__init__(self):
        """
        Ensure ``args`` are stored as a tuple and ``kwargs`` as a read-only
        mapping that keeps the keyword order.
        """
        call_args = CallArguments(1, 2, b=3, a=4)
        assert call_args.args == (1, 2)
        assert isinstance(call_args.kwargs, types.MappingProxyType)
        assert list(call_args.kwargs) == ['b', 'a']

    def test__init__self_keyword(self):
        """
        Ensure a keyword argument named ``self`` is accepted.
        """
        assert CallArguments(self=1).kwargs == {'self': 1}

    def test_immutable(self):
        """
        Ensure ``CallArguments`` can't be re-assigned.
        """
        with pytest.raises(ImmutableInstanceError):
            CallArguments(1).args = (2,)

    @pytest.mark.parametrize(('args', 'kwargs', 'expected'), [
        pytest.param((0,), {}, '0', id='args_only'),
        pytest.param((), {'a': 1}, 'a=1', id='kwargs_only'),
        pytest.param((0,), {'a': 1}, '0, a=1', id='args_and_kwargs'),
        pytest.param((), {}, '', id='neither_args_nor_kwargs'),
    ])
    def test__repr__(self, args, kwargs, expected):
        """
        Ensure that ``CallArguments.__repr__`` is a pretty print of ``args``
        and ``kwargs``.
        """
        assert repr(CallArguments(*args, **kwargs)) == \
            '<CallArguments ({})>'.format(expected)

    @pytest.mark.parametrize(('args', 'kwargs', 'expected'), [
        pytest.param((10, 5), {}, '_, _', id='args_only'),
        pytest.param((), {'rhs': 5, 'lhs': 10}, 'rhs=_, lhs=_', id='kwargs_only'),
        pytest.param((10,), {'add': True}, '_, add=_', id='args_and_kwargs'),
        pytest.param((), {}, '', id='neither_args_nor_kwargs'),
    ])
    def test_shape(self, args, kwargs, expected):
        """
        Ensure ``shape`` renders the call without its values.
        """
        assert CallArguments(*args, **kwargs).shape == expected

    @pytest.mark.parametrize(('other', 'eq'), [
        pytest.param(CallArguments(1, a=2), True, id='eq'),
        pytest.param(CallArguments(1, b=2), False, id='ne_kwargs'),
        pytest.param(CallArguments(2, a=2), False, id='ne_args'),
    ])
    def test__eq__(self, other, eq):
        """
        Ensure ``CallArguments`` compare by value.
        """
        assert (CallArguments(1, a=2) == other) == eq
