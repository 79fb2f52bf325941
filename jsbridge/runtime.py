"""
Script-side object model shared by the bridge and its collaborators.

Conventions:
 - JS objects are dicts whose prototype lives under '__proto__'
 - `undefined` is a singleton sentinel distinct from None (JS null)
 - native callables are invoked as call(interp, this, args)
"""
from __future__ import annotations
import math
from typing import Any, Dict, Iterator, List, Optional


class Undefined:
    def __repr__(self):
        return "undefined"
undefined = Undefined()


class _NotFound:
    def __repr__(self):
        return "NOT_FOUND"
# Returned by own-property lookups that miss; callers continue on the prototype.
NOT_FOUND = _NotFound()


class SymbolKey:
    """Well-known protocol keys (JS Symbol.*)."""
    def __init__(self, name: str):
        self.name = name

    def __repr__(self):
        return f"Symbol({self.name})"

SymbolKey.IS_CONCAT_SPREADABLE = SymbolKey("Symbol.isConcatSpreadable")
SymbolKey.ITERATOR = SymbolKey("Symbol.iterator")


class Scope:
    """Variable bindings for one level of script nesting."""

    def __init__(self, parent: Optional['Scope'] = None):
        self.vars: Dict[str, Any] = {}
        self.parent = parent

    def chain(self) -> Iterator['Scope']:
        """Yield this scope and its ancestors, innermost first."""
        visited = set()
        scope = self
        while scope is not None:
            if id(scope) in visited:
                raise RuntimeError("Scope parent chain contains a cycle")
            visited.add(id(scope))
            yield scope
            scope = scope.parent

    def owner(self, name: str) -> Optional['Scope']:
        return next((s for s in self.chain() if name in s.vars), None)

    def lookup(self, name: str, default: Any = NOT_FOUND) -> Any:
        scope = self.owner(name)
        return default if scope is None else scope.vars[name]

    def get(self, name: str):
        value = self.lookup(name)
        if value is NOT_FOUND:
            raise NameError(name)
        return value

    def set_local(self, name: str, value: Any):
        self.vars[name] = value

    def set(self, name: str, value: Any):
        (self.owner(name) or self).vars[name] = value

    def top_level(self) -> 'Scope':
        for scope in self.chain():
            pass
        return scope


class NativeFunction:
    """Callable exposed to scripts.

    Subclasses override call(); plain instances delegate to
    native_impl(interp, this, args).
    """

    def __init__(self, name: Optional[str] = None, native_impl=None):
        self.name = name
        self.native_impl = native_impl
        self.prototype: Dict[str, Any] = {'constructor': self}

    def call(self, interp, this, args: List[Any]):
        if self.native_impl is None:
            return undefined
        return self.native_impl(interp, this, list(args or ()))

    def __call__(self, *args):
        return self.call(None, None, list(args))

    def __repr__(self):
        return f"<NativeFunction {self.name or '<anon>'}>"


def is_wrapper(value: Any) -> bool:
    return callable(getattr(value, 'unwrap', None))


def unwrap(value: Any) -> Any:
    if is_wrapper(value):
        return value.unwrap()
    return value


def is_truthy(v) -> bool:
    if v is undefined or v is None: return False
    if isinstance(v, bool): return v
    if isinstance(v, (int, float)): return v != 0 and not (isinstance(v, float) and math.isnan(v))
    if isinstance(v, str): return v != ''
    return True


def to_number(v) -> float:
    """JS ToNumber for the value kinds the runtime produces."""
    if v is undefined:
        return float('nan')
    if v is None:
        return 0.0
    if isinstance(v, bool):
        return 1.0 if v else 0.0
    if isinstance(v, (int, float)):
        return float(v)
    if isinstance(v, str):
        s = v.strip()
        if s == '':
            return 0.0
        if s.lower().startswith('0x'):
            try:
                return float(int(s, 16))
            except ValueError:
                return float('nan')
        if s in ('Infinity', '+Infinity'):
            return math.inf
        if s == '-Infinity':
            return -math.inf
        try:
            return float(s)
        except ValueError:
            return float('nan')
    to_prim = getattr(v, 'coerces_to_primitive', None)
    if callable(to_prim):
        prim = to_prim('number')
        if prim is not v:
            return to_number(prim)
    return float('nan')


def to_string(v) -> str:
    """JS ToString."""
    if v is undefined:
        return "undefined"
    if v is None:
        return "null"
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, int):
        return str(v)
    if isinstance(v, float):
        if math.isnan(v):
            return "NaN"
        if math.isinf(v):
            return "Infinity" if v > 0 else "-Infinity"
        if v.is_integer():
            return str(int(v))
        return repr(v)
    if isinstance(v, str):
        return v
    to_prim = getattr(v, 'coerces_to_primitive', None)
    if callable(to_prim):
        prim = to_prim('string')
        if prim is not v:
            return to_string(prim)
    if isinstance(v, dict):
        return "[object Object]"
    return str(v)


def _dict_chain_get(obj, key):
    cur = obj
    seen = set()
    while cur is not None:
        if id(cur) in seen:
            return NOT_FOUND
        seen.add(id(cur))
        if isinstance(cur, dict):
            if key in cur:
                return cur[key]
            cur = cur.get('__proto__', None)
        else:
            res = get_property(cur, key)
            return NOT_FOUND if res is undefined else res
    return NOT_FOUND


def get_property(obj, name: str):
    """Prototype-aware named lookup. Returns `undefined` when not found."""
    if isinstance(obj, dict):
        res = _dict_chain_get(obj, name)
        return undefined if res is NOT_FOUND else res
    getter = getattr(obj, 'get_property', None)
    if callable(getter):
        res = getter(name)
        if res is not NOT_FOUND:
            return res
        proto = obj.resolve_prototype()
        if proto is None:
            return undefined
        res = _dict_chain_get(proto, name)
        return undefined if res is NOT_FOUND else res
    return getattr(obj, name, undefined)


def has_property(obj, name: str) -> bool:
    """True if `name` is an own property of obj or anywhere on its prototype chain."""
    if obj is None or obj is undefined:
        return False
    if isinstance(obj, dict):
        return _dict_chain_get(obj, name) is not NOT_FOUND
    checker = getattr(obj, 'has_property', None)
    if callable(checker):
        if checker(name):
            return True
        proto = obj.resolve_prototype()
        return proto is not None and has_property(proto, name)
    return hasattr(obj, name)


def is_concat_spreadable(obj, array_prototype=None) -> bool:
    getter = getattr(obj, 'get_symbol_key', None)
    if callable(getter):
        res = getter(SymbolKey.IS_CONCAT_SPREADABLE)
        if res is not NOT_FOUND and res is not undefined:
            return is_truthy(res)
    return isinstance(obj, dict) and array_prototype is not None and obj.get('__proto__') is array_prototype
