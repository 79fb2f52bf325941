from __future__ import annotations
from typing import Any, Tuple

import numpy as np


class ElementType:
    """Static type of one slot of a host array: a dtype plus the element shape.

    For a 1-D array the shape is empty and slots hold scalars; for an
    N-D array each slot is itself an (N-1)-D array of the same dtype.
    """

    __slots__ = ('dtype', 'shape')

    def __init__(self, dtype, shape: Tuple[int, ...] = ()):
        self.dtype = np.dtype(dtype)
        self.shape = tuple(shape)

    @classmethod
    def of_array(cls, array: np.ndarray) -> 'ElementType':
        return cls(array.dtype, array.shape[1:])

    @property
    def is_nested(self) -> bool:
        return bool(self.shape)

    @property
    def kind(self) -> str:
        return self.dtype.kind

    @property
    def name(self) -> str:
        if self.shape:
            dims = ''.join(f'[{n}]' for n in self.shape)
            return f'{self.dtype}{dims}'
        return str(self.dtype)

    def is_instance(self, value: Any) -> bool:
        """True if `value` could be stored in a slot of this type without conversion."""
        if self.is_nested:
            return isinstance(value, np.ndarray) and value.shape == self.shape and value.dtype == self.dtype
        kind = self.kind
        if kind == 'O':
            return value is not None
        if kind == 'U':
            return isinstance(value, str)
        if kind == 'S':
            return isinstance(value, bytes)
        if kind == 'b':
            return isinstance(value, (bool, np.bool_))
        return isinstance(value, self.dtype.type)

    def __eq__(self, other):
        if not isinstance(other, ElementType):
            return NotImplemented
        return self.dtype == other.dtype and self.shape == other.shape

    def __hash__(self):
        return hash((self.dtype, self.shape))

    def __repr__(self):
        return f'ElementType({self.name})'
