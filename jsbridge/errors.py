"""
Script-visible errors raised by the host array bridge.

Every error is a JSError so a script-level try/catch in the embedding runtime
can intercept it; `value` carries the message shown to the script.
"""
from typing import Any


class JSError(Exception):
    def __init__(self, value):
        self.value = value
        super().__init__(str(value))


class ConstructionError(JSError):
    pass


class InvalidArgument(ConstructionError):
    """Raised when something other than a host array is handed to the bridge."""


class MemberNotFound(JSError):
    def __init__(self, host_type_name: str, name: str):
        self.host_type_name = host_type_name
        self.name = name
        super().__init__(f'Host type "{host_type_name}" has no public instance field or method named "{name}".')


class UnsupportedMember(JSError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Host arrays have no public instance fields or methods named "{name}".')


class IndexOutOfBounds(JSError):
    def __init__(self, index: int, max_index: int):
        self.index = index
        self.max_index = max_index
        super().__init__(f"Array index {index} is out of bounds [0..{max_index}].")


class CoercionError(JSError):
    def __init__(self, value: Any, target: Any, reason: str = ""):
        self.script_value = value
        self.target = target
        msg = f"Cannot convert {value!r} to {target}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class ArityError(JSError):
    def __init__(self, function_name: str):
        self.function_name = function_name
        super().__init__(f"{function_name}: missing required search value argument")


class RangeError(JSError):
    pass
