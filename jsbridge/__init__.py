"""
jsbridge: expose fixed-size numpy arrays to a jsmini-style script runtime.

    import numpy as np
    from jsbridge import ArrayBridge, Scope, init_standard_objects

    scope = init_standard_objects(Scope())
    value = ArrayBridge.wrap(scope, np.array([1, 2, 3]))
    value.get_property('indexOf')(2)   # -> 1
    value.set_index(1, 5)              # mutates the ndarray in place
"""
from .bridge import ArrayBridge
from .builtins import init_standard_objects
from .coercion import CoercionEngine
from .config import BridgeConfig, configure_logging, load_config
from .element_type import ElementType
from .errors import (
    JSError, ConstructionError, InvalidArgument, MemberNotFound, UnsupportedMember,
    IndexOutOfBounds, CoercionError, ArityError, RangeError,
)
from .host import HostObject
from .resolver import ScopeResolver
from .runtime import NOT_FOUND, NativeFunction, Scope, SymbolKey, undefined, get_property, has_property
from .search import Contains, FindIndex, IndexSearch
from .wrapping import ElementWrapper, to_script

__all__ = [
    'ArrayBridge', 'init_standard_objects', 'CoercionEngine', 'BridgeConfig', 'configure_logging',
    'load_config', 'ElementType', 'JSError', 'ConstructionError', 'InvalidArgument', 'MemberNotFound',
    'UnsupportedMember', 'IndexOutOfBounds', 'CoercionError', 'ArityError', 'RangeError', 'HostObject',
    'ScopeResolver', 'NOT_FOUND', 'NativeFunction', 'Scope', 'SymbolKey', 'undefined',
    'get_property', 'has_property', 'Contains', 'FindIndex', 'IndexSearch', 'ElementWrapper',
    'to_script',
]
