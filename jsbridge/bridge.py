"""
ArrayBridge: a numpy array seen from script code.

Named keys, integer indices and protocol symbols are handled by three
separate method families (get_property / get_index / get_symbol_key and
their has_/set_ counterparts). The bridge never copies the array: writes
through set_index are visible to every other holder of the same ndarray.
"""
from __future__ import annotations
import logging
import math
from typing import Any, List, Optional

import numpy as np

from .element_type import ElementType
from .errors import InvalidArgument, IndexOutOfBounds, MemberNotFound, UnsupportedMember
from .host import HostObject
from .resolver import DEFAULT_RESOLVER, ScopeResolver
from .runtime import NOT_FOUND, SymbolKey, undefined, has_property, is_wrapper
from .search import Contains, FindIndex

logger = logging.getLogger('jsbridge.bridge')


class ArrayBridge(HostObject):
    class_name = 'HostArray'

    BUILTIN_MEMBERS = ('length', 'indexOf', 'includes')

    def __init__(self, scope, array: np.ndarray, wrapper=None, coercion=None,
                 resolver: Optional[ScopeResolver] = None):
        if not isinstance(array, np.ndarray) or array.ndim < 1:
            raise InvalidArgument("Array expected")
        super().__init__(scope, array, wrapper=wrapper)
        self.array = array
        self.length = int(array.shape[0])
        self.element_type = ElementType.of_array(array)
        self.coercion = coercion if coercion is not None else self.wrapper.coercion
        self.resolver = resolver if resolver is not None else DEFAULT_RESOLVER
        self._prototype = None
        self._prototype_resolved = False
        logger.debug("bridged %s of length %d", self.element_type.name, self.length)

    @classmethod
    def wrap(cls, scope, array: np.ndarray, **kwargs) -> 'ArrayBridge':
        return cls(scope, array, **kwargs)

    # --- named properties ---------------------------------------------------
    def has_property(self, name: str) -> bool:
        return name in self.BUILTIN_MEMBERS or super().has_property(name)

    def get_property(self, name: str):
        if name == 'length':
            return self.length
        if name == 'indexOf':
            return FindIndex(self.array)
        if name == 'includes':
            return Contains(self.array)
        result = super().get_property(name)
        if result is NOT_FOUND and not has_property(self.resolve_prototype(), name):
            raise MemberNotFound(self.host_type_name, name)
        return result

    def set_property(self, name: str, value: Any) -> None:
        if name == 'length':
            return  # read-only
        raise UnsupportedMember(name)

    # --- indices ------------------------------------------------------------
    def has_index(self, index: int) -> bool:
        return 0 <= index < self.length

    def get_index(self, index: int):
        if 0 <= index < self.length:
            return self.wrapper.wrap(self.array[index], self.element_type, self.parent_scope)
        return undefined

    def set_index(self, index: int, value: Any) -> None:
        if not 0 <= index < self.length:
            logger.debug("write to index %d rejected (length %d)", index, self.length)
            raise IndexOutOfBounds(index, self.length - 1)
        self.array[index] = self.coercion.coerce(value, self.element_type)

    def list_own_keys(self) -> List[int]:
        return list(range(self.length))

    # --- protocol symbols ---------------------------------------------------
    def has_symbol_key(self, key: SymbolKey) -> bool:
        return key is SymbolKey.IS_CONCAT_SPREADABLE

    def get_symbol_key(self, key: SymbolKey):
        if key is SymbolKey.IS_CONCAT_SPREADABLE:
            return True
        return NOT_FOUND

    def delete_symbol_key(self, key: SymbolKey) -> None:
        pass  # protocol keys are immutable

    # --- conversions --------------------------------------------------------
    def coerces_to_primitive(self, hint: Optional[str] = None):
        if hint is None or hint == 'string':
            return str(self.array)
        if hint == 'boolean':
            return True
        if hint == 'number':
            return math.nan
        return self

    def instance_check(self, candidate: Any) -> bool:
        # checks against the element type, not "array of element type"
        if not is_wrapper(candidate):
            return False
        return self.element_type.is_instance(candidate.unwrap())

    def resolve_prototype(self):
        if not self._prototype_resolved:
            if self.parent_scope is not None:
                self._prototype = self.resolver.lookup_array_prototype(self.parent_scope)
            self._prototype_resolved = True
        return self._prototype

    # --- Python conveniences ------------------------------------------------
    def __len__(self) -> int:
        return self.length

    def __iter__(self):
        for index in range(self.length):
            yield self.get_index(index)

    def __getitem__(self, index: int):
        return self.get_index(index)

    def __setitem__(self, index: int, value: Any) -> None:
        self.set_index(index, value)

    def __repr__(self):
        return f"<{self.class_name} {self.element_type.name}[{self.length}]>"
