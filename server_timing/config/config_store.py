# server_timing/config/config_store.py
"""
Process-wide configuration store.

Settings marked ``FROM_CONFIG`` are looked up here at request time, under the
``server_timing`` namespace. ``initialize_config()`` seeds it at startup; tests
and embedding applications may write to it directly.

Usage:
    from server_timing.config import set_store_value, TimeUnit

    set_store_value("header_unit", TimeUnit.SECOND)
    set_store_value("enabled", False)
"""

import threading
from typing import Any, Dict, Optional, Tuple
from server_timing.errors import ConfigurationError

STORE_NAMESPACE = "server_timing"


class _ConfigStoreState:
    """
    Thread-safe singleton holding namespaced configuration values.
    """

    _instance: Optional["_ConfigStoreState"] = None
    _lock = threading.Lock()

    _values: Dict[Tuple[str, str], Any]

    def __new__(cls) -> "_ConfigStoreState":
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:  # Double-check locking
                    instance = super().__new__(cls)
                    instance._values = {}
                    cls._instance = instance
        return cls._instance

    def put(self, namespace: str, key: str, value: Any) -> None:
        with self._lock:
            self._values[(namespace, key)] = value

    def get(self, namespace: str, key: str) -> Any:
        with self._lock:
            return self._values[(namespace, key)]

    def delete(self, namespace: str, key: str) -> None:
        with self._lock:
            self._values.pop((namespace, key), None)

    def clear(self, namespace: Optional[str] = None) -> None:
        with self._lock:
            if namespace is None:
                self._values.clear()
                return
            for stored in [k for k in self._values if k[0] == namespace]:
                del self._values[stored]


_state = _ConfigStoreState()


def set_store_value(key: str, value: Any, namespace: str = STORE_NAMESPACE) -> None:
    """Set a configuration value, replacing any previous one."""
    _state.put(namespace, key, value)


def get_store_value(key: str, namespace: str = STORE_NAMESPACE) -> Any:
    """
    Get a configuration value.

    Raises:
        ConfigurationError: If nothing is stored under ``key``
    """
    try:
        return _state.get(namespace, key)
    except KeyError:
        raise ConfigurationError(
            f"Missing config store value: {namespace}.{key}"
        ) from None


def delete_store_value(key: str, namespace: str = STORE_NAMESPACE) -> None:
    """Remove a configuration value if present."""
    _state.delete(namespace, key)


def clear_store(namespace: Optional[str] = None) -> None:
    """Remove all values in ``namespace``, or everything when omitted."""
    _state.clear(namespace)


__all__ = [
    "STORE_NAMESPACE",
    "set_store_value",
    "get_store_value",
    "delete_store_value",
    "clear_store",
]
