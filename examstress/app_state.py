"""Centralized service registry for examstress.

Import `registry` to reach the shared session store
from page callbacks.
"""

from dataclasses import dataclass, field

from examstress.engine.store import SessionStore


@dataclass
class ServiceRegistry:
    session_store: SessionStore = field(default_factory=SessionStore)


# Singleton-like shared registry instance
registry = ServiceRegistry()


__all__ = ["ServiceRegistry", "registry"]
