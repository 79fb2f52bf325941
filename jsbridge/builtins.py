"""
Register the Array constructor and its shared prototype in a scope.

Usage:
    from jsbridge.builtins import init_standard_objects
    scope = init_standard_objects(Scope())

Prototype methods are generic over "array-likes": dict-backed script arrays
({'__proto__': Array.prototype, 'length': n, '0': ...}) and host array
bridges, which are read through get_index(). native_impl signature:
    native_impl(interp, this, args)
"""
import math
from typing import Any, Dict, List, Optional

from .errors import RangeError
from .runtime import (
    NativeFunction, Scope, undefined, get_property, is_concat_spreadable,
    is_truthy, to_number, to_string,
)


_MAX_LENGTH = 2 ** 53 - 1
_MAX_ARRAY_LENGTH = 2 ** 32 - 1


def _length(this) -> int:
    if isinstance(this, dict):
        n = to_number(this.get('length', 0))
    else:
        n = to_number(get_property(this, 'length'))
    if math.isnan(n) or n < 0:
        return 0
    return int(min(n, _MAX_LENGTH))


def _item(this, index: int):
    if isinstance(this, dict):
        return this.get(str(index), undefined)
    getter = getattr(this, 'get_index', None)
    if callable(getter):
        return getter(index)
    return undefined


def _invoke(interp, fn, this_arg, args: List[Any]):
    if isinstance(fn, NativeFunction) or hasattr(fn, 'call'):
        return fn.call(interp, this_arg, args)
    if callable(fn):
        return fn(*args)
    raise TypeError(f"{to_string(fn)} is not a function")


def _relative_index(arg, length: int, default: int) -> int:
    if arg is undefined:
        return default
    n = to_number(arg)
    if math.isnan(n):
        return 0
    if math.isinf(n):
        return length if n > 0 else 0
    n = int(n)
    if n < 0:
        return max(length + n, 0)
    return min(n, length)


def register_array(scope: Scope) -> NativeFunction:
    proto: Dict[str, Any] = {}

    def make_array(items: Optional[List[Any]] = None) -> Dict[str, Any]:
        res: Dict[str, Any] = {'__proto__': proto, 'length': 0}
        for i, v in enumerate(items or ()):
            res[str(i)] = v
        res['length'] = len(items or ())
        return res

    def _array_ctor(interp, this, args):
        if len(args) == 1 and isinstance(args[0], (int, float)) and not isinstance(args[0], bool):
            n = float(args[0])
            if not (math.isfinite(n) and n.is_integer() and 0 <= n <= _MAX_ARRAY_LENGTH):
                raise RangeError("Invalid array length")
            arr = make_array()
            arr['length'] = int(n)
            return arr
        return make_array(list(args))

    def _array_join(interp, this, args):
        sep = ',' if not args or args[0] is undefined else to_string(args[0])
        parts = []
        for i in range(_length(this)):
            v = _item(this, i)
            parts.append('' if v is undefined or v is None else to_string(v))
        return sep.join(parts)

    def _array_to_string(interp, this, args):
        return _array_join(interp, this, [])

    def _array_for_each(interp, this, args):
        cb = args[0] if args else undefined
        this_arg = args[1] if len(args) > 1 else undefined
        for i in range(_length(this)):
            _invoke(interp, cb, this_arg, [_item(this, i), i, this])
        return undefined

    def _array_map(interp, this, args):
        cb = args[0] if args else undefined
        this_arg = args[1] if len(args) > 1 else undefined
        return make_array([_invoke(interp, cb, this_arg, [_item(this, i), i, this])
                           for i in range(_length(this))])

    def _array_filter(interp, this, args):
        cb = args[0] if args else undefined
        this_arg = args[1] if len(args) > 1 else undefined
        out = []
        for i in range(_length(this)):
            v = _item(this, i)
            if is_truthy(_invoke(interp, cb, this_arg, [v, i, this])):
                out.append(v)
        return make_array(out)

    def _array_slice(interp, this, args):
        length = _length(this)
        start = _relative_index(args[0] if args else undefined, length, 0)
        end = _relative_index(args[1] if len(args) > 1 else undefined, length, length)
        return make_array([_item(this, i) for i in range(start, end)])

    def _array_concat(interp, this, args):
        out = []
        for a in [this] + list(args):
            if is_concat_spreadable(a, proto):
                out.extend(_item(a, i) for i in range(_length(a)))
            else:
                out.append(a)
        return make_array(out)

    Arr = NativeFunction(name='Array', native_impl=_array_ctor)
    Arr.prototype = proto
    proto['constructor'] = Arr
    proto['join'] = NativeFunction(name='join', native_impl=_array_join)
    proto['toString'] = NativeFunction(name='toString', native_impl=_array_to_string)
    proto['forEach'] = NativeFunction(name='forEach', native_impl=_array_for_each)
    proto['map'] = NativeFunction(name='map', native_impl=_array_map)
    proto['filter'] = NativeFunction(name='filter', native_impl=_array_filter)
    proto['slice'] = NativeFunction(name='slice', native_impl=_array_slice)
    proto['concat'] = NativeFunction(name='concat', native_impl=_array_concat)
    Arr.make_array = make_array

    scope.set_local('Array', Arr)
    return Arr


def init_standard_objects(scope: Optional[Scope] = None) -> Scope:
    scope = scope if scope is not None else Scope()
    top = scope.top_level()
    top.set_local('undefined', undefined)
    top.set_local('NaN', float('nan'))
    register_array(top)
    return scope
