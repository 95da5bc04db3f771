# src/better_fetch/plugins/__init__.py
from .auth_plugin import AuthPlugin
from .logging_plugin import LoggingPlugin
from .plugin import Plugin, PluginResult

__all__ = [
    "Plugin",
    "PluginResult",
    "AuthPlugin",
    "LoggingPlugin",
]
