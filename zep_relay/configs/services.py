"""
Shared Services

Thread-safe lazy-initialized services shared by the MCP tools and HTTP
endpoints. Holds only immutable settings and stateless objects: nothing
here caches backend sessions.
"""

from threading import RLock
from typing import TYPE_CHECKING, Optional

from zep_relay.configs.settings import RelaySettings, load_settings

if TYPE_CHECKING:
    from zep_relay.relay import SessionRelay
    from zep_relay.tools.registry import ToolRegistry


class ServiceManager:
    """
    Thread-safe singleton manager for shared services.

    Settings are loaded once; the relay and registry are built from them
    on first use.
    """

    _instance: Optional["ServiceManager"] = None
    _lock = RLock()

    def __new__(cls) -> "ServiceManager":
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self) -> None:
        if self._initialized:
            return

        self._settings: Optional[RelaySettings] = None
        self._relay: Optional["SessionRelay"] = None
        self._registry: Optional["ToolRegistry"] = None
        self._resource_lock = RLock()
        self._initialized = True

    def configure(self, settings: RelaySettings) -> None:
        """Install settings explicitly (before first use)."""
        with self._resource_lock:
            self._settings = settings
            self._relay = None
            self._registry = None

    @property
    def settings(self) -> RelaySettings:
        """Get or load the relay settings."""
        if self._settings is None:
            with self._resource_lock:
                if self._settings is None:
                    self._settings = load_settings()
        return self._settings

    @property
    def relay(self) -> "SessionRelay":
        """Get or create the session relay."""
        if self._relay is None:
            with self._resource_lock:
                if self._relay is None:
                    from zep_relay.relay import SessionRelay

                    self._relay = SessionRelay(self.settings)
        return self._relay

    @property
    def registry(self) -> "ToolRegistry":
        """Get or create the tool registry."""
        if self._registry is None:
            with self._resource_lock:
                if self._registry is None:
                    from zep_relay.tools.registry import ToolRegistry

                    self._registry = ToolRegistry(self.relay)
        return self._registry

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton (tests)."""
        with cls._lock:
            cls._instance = None


def get_services() -> ServiceManager:
    return ServiceManager()


def configure_services(settings: RelaySettings) -> None:
    get_services().configure(settings)


def get_settings() -> RelaySettings:
    return get_services().settings


def get_registry() -> "ToolRegistry":
    return get_services().registry


def reset_services() -> None:
    ServiceManager.reset()
