from __future__ import annotations
import logging
from typing import Optional

from .runtime import Scope

logger = logging.getLogger('jsbridge.resolver')


class ScopeResolver:
    """Finds the shared Array.prototype visible from a scope."""

    def lookup_array_prototype(self, scope: Scope) -> Optional[dict]:
        """Return Array.prototype from the top-level scope, or None if no Array is installed."""
        top = scope.top_level()
        ctor = top.lookup('Array', None)
        if ctor is None:
            logger.debug("no Array constructor in top-level scope %#x", id(top))
            return None
        if isinstance(ctor, dict):
            return ctor.get('prototype')
        return getattr(ctor, 'prototype', None)


DEFAULT_RESOLVER = ScopeResolver()
