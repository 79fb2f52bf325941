"""
Host value -> script value conversion, applied on every indexed read.
"""
from __future__ import annotations
import logging
import weakref
from typing import Any, Optional

import numpy as np

from .coercion import CoercionEngine
from .config import BridgeConfig, DEFAULT_CONFIG
from .element_type import ElementType
from .host import HostObject

logger = logging.getLogger('jsbridge.wrapping')

_PRIMITIVES = (bool, int, float, str)


class ElementWrapper:
    """Turns host values into script values.

    numpy scalars become Python primitives, arrays become ArrayBridge
    instances (recursively, since a row read from an N-D array is itself an
    array) and anything else is exposed through HostObject.
    """

    def __init__(self, config: BridgeConfig = DEFAULT_CONFIG, coercion: Optional[CoercionEngine] = None):
        self.config = config
        self.coercion = coercion if coercion is not None else CoercionEngine(truncate_strings=config.truncate_strings)
        self._bridges: Optional[weakref.WeakValueDictionary] = (
            weakref.WeakValueDictionary() if config.identity_cache else None
        )

    @classmethod
    def from_config(cls, config: BridgeConfig) -> 'ElementWrapper':
        return cls(config)

    def wrap(self, host_value: Any, element_type: Optional[ElementType], scope=None) -> Any:
        if host_value is None:
            return None
        if isinstance(host_value, np.ndarray):
            if host_value.ndim == 0:
                return self.wrap(host_value.item(), element_type, scope)
            return self.wrap_array(host_value, scope)
        if isinstance(host_value, np.generic):
            host_value = host_value.item()
        if isinstance(host_value, bytes):
            return host_value.decode('latin-1')
        if isinstance(host_value, _PRIMITIVES):
            return host_value
        if isinstance(host_value, HostObject):
            return host_value
        return HostObject(scope, host_value, wrapper=self)

    def wrap_array(self, array: np.ndarray, scope=None):
        from .bridge import ArrayBridge
        if self._bridges is None:
            return ArrayBridge(scope, array, wrapper=self)
        # the bridge holds the array, so its id stays valid while the entry lives
        key = id(array)
        bridge = self._bridges.get(key)
        if bridge is None or bridge.array is not array:
            bridge = ArrayBridge(scope, array, wrapper=self)
            self._bridges[key] = bridge
        return bridge


DEFAULT_WRAPPER = ElementWrapper()


def to_script(value: Any, scope=None, wrapper: Optional[ElementWrapper] = None) -> Any:
    """Hand a host value to script code, wrapping arrays in a bridge."""
    return (wrapper or DEFAULT_WRAPPER).wrap(value, None, scope)
