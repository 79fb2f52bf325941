"""
Script value -> host value conversion, applied on every indexed write.
"""
from __future__ import annotations
import logging
import math
from typing import Any, List

import numpy as np

from .element_type import ElementType
from .errors import CoercionError
from .runtime import undefined, unwrap, is_truthy, to_number, to_string

logger = logging.getLogger('jsbridge.coercion')


def _fail(value, element_type: ElementType, reason: str = ''):
    logger.debug("coercion of %r to %s failed: %s", value, element_type.name, reason or 'incompatible')
    return CoercionError(value, element_type.name, reason)


def _js_array_items(original, value, element_type: ElementType) -> List[Any]:
    """Elements of a dict-backed script array, in index order."""
    length = to_number(value.get('length', 0))
    if math.isnan(length) or math.isinf(length) or length < 0:
        raise _fail(original, element_type, 'array expected')
    return [value.get(str(i), undefined) for i in range(int(length))]


class CoercionEngine:
    def __init__(self, truncate_strings: bool = False):
        self.truncate_strings = truncate_strings

    def coerce(self, value: Any, element_type: ElementType) -> Any:
        original = value
        value = unwrap(value)
        if isinstance(value, np.generic):
            value = value.item()
        if element_type.is_nested:
            return self._coerce_nested(original, value, element_type)
        kind = element_type.kind
        if kind == 'b':
            return bool(is_truthy(value))
        if kind in 'iu':
            return self._coerce_integer(original, value, element_type)
        if kind == 'f':
            return self._coerce_float(original, value, element_type)
        if kind == 'c':
            if isinstance(value, bool) or not isinstance(value, (int, float, complex)):
                raise _fail(original, element_type, 'not a number')
            return element_type.dtype.type(value)
        if kind in 'US':
            return self._coerce_text(original, value, element_type)
        if kind == 'O':
            return None if value is undefined else value
        raise _fail(original, element_type, f'unsupported element kind {kind!r}')

    def _coerce_integer(self, original, value, element_type: ElementType):
        if value is undefined or value is None:
            raise _fail(original, element_type)
        if isinstance(value, bool):
            n = int(value)
        elif isinstance(value, int):
            n = value
        elif isinstance(value, (float, str)):
            num = to_number(value)
            if math.isnan(num) or math.isinf(num):
                raise _fail(original, element_type, 'not a finite number')
            n = int(num)
        else:
            raise _fail(original, element_type)
        info = np.iinfo(element_type.dtype)
        if not info.min <= n <= info.max:
            raise _fail(original, element_type, f'out of range [{info.min}..{info.max}]')
        return element_type.dtype.type(n)

    def _coerce_float(self, original, value, element_type: ElementType):
        if value is undefined or value is None:
            raise _fail(original, element_type)
        if not isinstance(value, (bool, int, float, str)):
            raise _fail(original, element_type)
        return element_type.dtype.type(to_number(value))

    def _coerce_text(self, original, value, element_type: ElementType):
        if value is None or value is undefined:
            raise _fail(original, element_type, 'fixed-width text slots cannot hold null')
        if isinstance(value, bytes):
            value = value.decode('latin-1')
        s = to_string(value)
        if element_type.kind == 'U':
            capacity = element_type.dtype.itemsize // 4
        else:
            capacity = element_type.dtype.itemsize
        if len(s) > capacity:
            if not self.truncate_strings:
                raise _fail(original, element_type, f'longer than {capacity} characters')
            s = s[:capacity]
        if element_type.kind == 'S':
            try:
                return s.encode('latin-1')
            except UnicodeEncodeError:
                raise _fail(original, element_type, 'not representable as latin-1') from None
        return s

    def _coerce_nested(self, original, value, element_type: ElementType):
        if isinstance(value, np.ndarray):
            if value.shape != element_type.shape:
                raise _fail(original, element_type, f'shape {value.shape} != {element_type.shape}')
            if not np.can_cast(value.dtype, element_type.dtype, casting='same_kind'):
                raise _fail(original, element_type, f'dtype {value.dtype} not castable')
            if np.can_cast(value.dtype, element_type.dtype, casting='safe'):
                return value.astype(element_type.dtype, copy=False)
            # narrowing cast: range-check every item like a scalar write
            items = list(value)
        elif isinstance(value, dict) and 'length' in value:
            items = _js_array_items(original, value, element_type)
        elif isinstance(value, (list, tuple)):
            items = list(value)
        else:
            raise _fail(original, element_type, 'array expected')
        if len(items) != element_type.shape[0]:
            raise _fail(original, element_type, f'length {len(items)} != {element_type.shape[0]}')
        inner = ElementType(element_type.dtype, element_type.shape[1:])
        out = np.empty(element_type.shape, dtype=element_type.dtype)
        for i, item in enumerate(items):
            out[i] = self.coerce(item, inner)
        return out


DEFAULT_COERCION = CoercionEngine()
