"""
Minimal reflective wrapper for a single host (Python) value.

Only attributes listed in the configured `exposed_members` are visible to
scripts; callables are exposed as native functions whose arguments are
unwrapped and whose result is wrapped again.
"""
from __future__ import annotations
from typing import Any, Iterable, Optional

from .config import DEFAULT_EXPOSED_MEMBERS
from .errors import MemberNotFound
from .runtime import NOT_FOUND, NativeFunction, unwrap, to_number


class HostObject:
    class_name = 'HostObject'

    def __init__(self, scope, value: Any, wrapper=None,
                 exposed_members: Optional[Iterable[str]] = None):
        self.parent_scope = scope
        self.value = value
        if wrapper is None:
            from .wrapping import DEFAULT_WRAPPER
            wrapper = DEFAULT_WRAPPER
        self.wrapper = wrapper
        if exposed_members is None:
            exposed_members = wrapper.config.exposed_members if wrapper is not None else DEFAULT_EXPOSED_MEMBERS
        self.exposed_members = frozenset(exposed_members)

    def unwrap(self):
        return self.value

    @property
    def host_type_name(self) -> str:
        cls = type(self.value)
        return f"{cls.__module__}.{cls.__qualname__}"

    def resolve_prototype(self):
        return None

    def has_property(self, name: str) -> bool:
        return name in self.exposed_members and not name.startswith('_') and hasattr(self.value, name)

    def get_property(self, name: str):
        if not self.has_property(name):
            return NOT_FOUND
        attr = getattr(self.value, name)
        if callable(attr):
            return self._bind_method(name, attr)
        return self.wrapper.wrap(attr, None, self.parent_scope)

    def _bind_method(self, name: str, method):
        wrapper = self.wrapper
        scope = self.parent_scope

        def _invoke(interp, this, args):
            result = method(*[unwrap(a) for a in args])
            return wrapper.wrap(result, None, scope)

        return NativeFunction(name, native_impl=_invoke)

    def set_property(self, name: str, value: Any) -> None:
        raise MemberNotFound(self.host_type_name, name)

    def coerces_to_primitive(self, hint: Optional[str] = None):
        if hint is None or hint == 'string':
            return str(self.value)
        if hint == 'boolean':
            return True
        if hint == 'number':
            if isinstance(self.value, (int, float)) and not isinstance(self.value, bool):
                return float(self.value)
            return to_number(str(self.value))
        return self

    def __repr__(self):
        return f"<{self.class_name} {self.value!r}>"
