import numpy as np
import pytest

from test_base import BridgeTestCase  # noqa: F401  (sets up sys.path)

from jsbridge import ArrayBridge, NativeFunction, RangeError, Scope, get_property, init_standard_objects, undefined
from jsbridge.resolver import ScopeResolver


def make_test_scope():
    return init_standard_objects(Scope())


def make_bridge(scope, values, dtype=np.int64):
    return ArrayBridge.wrap(scope, np.array(values, dtype=dtype))


def items(arr):
    return [arr[str(i)] for i in range(arr['length'])]


def test_array_constructor():
    scope = make_test_scope()
    Arr = scope.get('Array')
    a = Arr(1, 2)
    assert a['length'] == 2
    assert items(a) == [1, 2]
    assert a['__proto__'] is Arr.prototype
    assert Arr(3)['length'] == 3


def test_join_through_prototype_lookup():
    scope = make_test_scope()
    b = make_bridge(scope, [1, 2, 3])
    join = get_property(b, 'join')
    assert join.call(None, b, []) == "1,2,3"
    assert join.call(None, b, ["-"]) == "1-2-3"
    assert get_property(b, 'toString').call(None, b, []) == "1,2,3"


def test_map_filter_foreach_over_bridge():
    scope = make_test_scope()
    b = make_bridge(scope, [1, 2, 3])
    double = NativeFunction('double', native_impl=lambda interp, this, args: args[0] * 2)
    odd = NativeFunction('odd', native_impl=lambda interp, this, args: args[0] % 2 == 1)
    assert items(get_property(b, 'map').call(None, b, [double])) == [2, 4, 6]
    assert items(get_property(b, 'filter').call(None, b, [odd])) == [1, 3]

    seen = []
    get_property(b, 'forEach').call(None, b, [lambda v, i, arr: seen.append((i, v, arr))])
    assert seen == [(0, 1, b), (1, 2, b), (2, 3, b)]


def test_slice_relative_indices():
    scope = make_test_scope()
    b = make_bridge(scope, [1, 2, 3, 4])
    slice_fn = get_property(b, 'slice')
    assert items(slice_fn.call(None, b, [-2])) == [3, 4]
    assert items(slice_fn.call(None, b, [1, 3])) == [2, 3]
    assert items(slice_fn.call(None, b, [5])) == []


def test_concat_spreads_bridges():
    scope = make_test_scope()
    Arr = scope.get('Array')
    b1 = make_bridge(scope, [1, 2])
    b2 = make_bridge(scope, [3])
    concat = get_property(b1, 'concat')
    res = concat.call(None, b1, [b2, Arr.make_array([4]), 5, {'length': 1, '0': 'x'}])
    assert items(res)[:5] == [1, 2, 3, 4, 5]
    # plain dicts without Array.prototype are not spread
    assert res['length'] == 6
    assert items(res)[5] == {'length': 1, '0': 'x'}


def test_nested_rows_join():
    scope = make_test_scope()
    b = make_bridge(scope, [[1, 2], [3, 4]])
    row = b.get_index(1)
    assert get_property(row, 'join').call(None, row, []) == "3,4"


def test_join_renders_missing_as_empty():
    scope = make_test_scope()
    Arr = scope.get('Array')
    a = Arr(None, undefined, 1)
    assert get_property(a, 'join').call(None, a, []) == ",,1"


def test_unknown_callback_raises():
    scope = make_test_scope()
    b = make_bridge(scope, [1])
    with pytest.raises(TypeError):
        get_property(b, 'forEach').call(None, b, [5])


def test_resolver_without_array():
    assert ScopeResolver().lookup_array_prototype(Scope()) is None
    scope = make_test_scope()
    assert ScopeResolver().lookup_array_prototype(Scope(scope)) is scope.get('Array').prototype


def test_slice_non_finite_bounds():
    scope = make_test_scope()
    b = make_bridge(scope, [1, 2, 3])
    slice_fn = get_property(b, 'slice')
    inf = float('inf')
    assert items(slice_fn.call(None, b, [0, inf])) == [1, 2, 3]
    assert items(slice_fn.call(None, b, [-inf, 2])) == [1, 2]
    assert items(slice_fn.call(None, b, [inf])) == []
    assert items(slice_fn.call(None, b, [float('nan'), -inf])) == []


def test_non_finite_length_on_dict_array():
    scope = make_test_scope()
    join = scope.get('Array').prototype['join']
    assert join.call(None, {'length': float('nan'), '0': 'a'}, []) == ""
    assert join.call(None, {'length': undefined, '0': 'a'}, []) == ""
    assert join.call(None, {'length': -3}, []) == ""


@pytest.mark.parametrize('length', [float('nan'), float('inf'), -1, 2.5, 2 ** 32])
def test_array_constructor_rejects_invalid_length(length):
    Arr = make_test_scope().get('Array')
    with pytest.raises(RangeError):
        Arr(length)
