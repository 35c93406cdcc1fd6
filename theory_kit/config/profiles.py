"""
Named strategy profiles.

A profile is a function adjusting a Strategy, registered under a scope (for
example a test class) and a name. The registry is an explicit object owned by
the test wiring so suites can build, share and clear their own.
"""

import logging
import threading
from collections.abc import Callable, Hashable

from ..core.strategy import Strategy
from ..utilities.constants import ConfigurationError

logger = logging.getLogger(__name__)

Profile = Callable[[Strategy], Strategy]

DEFAULT_PROFILE = "default"


def _scope_name(scope: Hashable) -> str:
    return getattr(scope, "__name__", str(scope))


class ProfileRegistry:
    """Thread-safe mapping of (scope, name) to profile."""

    def __init__(self):
        self._profiles: dict[Hashable, dict[str, Profile]] = {}
        self._lock = threading.Lock()

    def register_profile(self, scope: Hashable, name: str, profile: Profile) -> None:
        """
        Register a named profile for ``scope``.

        Raises:
            ValueError: If ``scope`` already has a profile called ``name``
        """
        with self._lock:
            per_scope = self._profiles.setdefault(scope, {})
            if name in per_scope:
                raise ValueError(
                    f"Profile {name} already exists for class {_scope_name(scope)}"
                )
            per_scope[name] = profile
        logger.debug(f"Registered profile {name} for {_scope_name(scope)}")

    def register_default_profile(self, scope: Hashable, profile: Profile) -> None:
        self.register_profile(scope, DEFAULT_PROFILE, profile)

    def get_profile(self, scope: Hashable, name: str) -> Profile | None:
        with self._lock:
            return self._profiles.get(scope, {}).get(name)

    def get_default_profile(self, scope: Hashable) -> Profile | None:
        return self.get_profile(scope, DEFAULT_PROFILE)

    def apply_profile(self, scope: Hashable, name: str, strategy: Strategy) -> Strategy:
        """
        Apply the named profile of ``scope`` to ``strategy``.

        Raises:
            ConfigurationError: If no such profile is registered
        """
        profile = self.get_profile(scope, name)
        if profile is None:
            raise ConfigurationError(f"No profile {name} registered for class {_scope_name(scope)}")
        return profile(strategy)

    def apply_default_profile(self, scope: Hashable, strategy: Strategy) -> Strategy:
        """Apply the default profile of ``scope`` if one is registered."""
        profile = self.get_default_profile(scope)
        if profile is None:
            return strategy
        return profile(strategy)

    def clear(self) -> None:
        with self._lock:
            self._profiles.clear()
