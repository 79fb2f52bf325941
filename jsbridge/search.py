"""
indexOf / includes for host arrays.

Both share IndexSearch.scan(); they differ only in how the optional start
argument is turned into an offset and in how the result is reported.
"""
from __future__ import annotations
import logging
import math
from typing import Any, List

import numpy as np

from .errors import ArityError, IndexOutOfBounds
from .runtime import NativeFunction, unwrap, to_number

logger = logging.getLogger('jsbridge.search')

_INT_MIN = -2 ** 31
_INT_MAX = 2 ** 31 - 1


def int_value(v: Any) -> int:
    """Number.intValue(): truncate toward zero, NaN -> 0, saturate at 32 bits."""
    n = to_number(unwrap(v))
    if math.isnan(n):
        return 0
    if n >= _INT_MAX:
        return _INT_MAX
    if n <= _INT_MIN:
        return _INT_MIN
    return int(n)


def _plain(v):
    if isinstance(v, np.generic):
        v = v.item()
    if isinstance(v, bytes):
        v = v.decode('latin-1')
    return v


def deep_equals(a: Any, b: Any) -> bool:
    """Structural equality between a search value and a host element."""
    a = _plain(a)
    b = _plain(b)
    a_arr = isinstance(a, np.ndarray)
    b_arr = isinstance(b, np.ndarray)
    if a_arr or b_arr:
        return a_arr and b_arr and a.shape == b.shape and bool(np.array_equal(a, b))
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return a == b
    if type(a) is not type(b) and not (isinstance(a, str) and isinstance(b, str)):
        return False
    return bool(a == b)


class IndexSearch(NativeFunction):
    """Linear scan over one host array, bound at construction."""

    function_name = 'search'

    def __init__(self, array: np.ndarray, predicate=deep_equals):
        super().__init__(self.function_name)
        self.array = array
        self.predicate = predicate

    def start_offset(self, args: List[Any]) -> int:
        return int_value(args[1]) if len(args) > 1 else 0

    def scan(self, args: List[Any]) -> int:
        if not args:
            raise ArityError(self.function_name)
        target = unwrap(args[0])
        start = self.start_offset(args)
        array = self.array
        length = len(array)
        if start < 0:
            # first read would land before the array
            logger.debug("%s: start offset %d out of range for length %d", self.function_name, start, length)
            raise IndexOutOfBounds(start, length - 1)
        for index in range(start, length):
            if self.predicate(target, array[index]):
                return index
        return -1


class FindIndex(IndexSearch):
    """indexOf(value, start?) -> first matching index or -1.

    A negative start is offset by the number of arguments passed to the call,
    not by the array length: indexOf(v, -1) starts scanning at index 1.
    """

    function_name = 'indexOf'

    def start_offset(self, args: List[Any]) -> int:
        start = super().start_offset(args)
        if start < 0:
            start = len(args) + start
        return start

    def call(self, interp, this, args):
        return self.scan(list(args or ()))


class Contains(IndexSearch):
    """includes(value, start?) -> bool. The start offset is taken literally."""

    function_name = 'includes'

    def call(self, interp, this, args):
        return self.scan(list(args or ())) != -1
