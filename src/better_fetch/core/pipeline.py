"""
Plugin pipeline.

Plugins run strictly sequentially in registration order; each receives the
(url, options) pair produced by the previous one.
"""

import inspect
from typing import Any, Iterable, Tuple

from .exceptions import PluginError
from .options import FetchOptions


async def maybe_await(value: Any) -> Any:
    """Await value if it is awaitable (hooks and parsers may be sync or async)."""
    if inspect.isawaitable(value):
        return await value
    return value


async def apply_plugins(
    plugins: Iterable[Any],
    url: str,
    options: FetchOptions,
) -> Tuple[str, FetchOptions]:
    """
    Run every plugin over (url, options).

    Args:
        plugins: Plugin instances or callables
        url: Caller URL
        options: Caller options

    Returns:
        (url, options) after the last plugin

    Raises:
        PluginError: A plugin returned an unsupported value
        Exception: Anything a plugin raises propagates unchanged
    """
    for plugin in plugins:
        result = await maybe_await(plugin(url, options))
        url, options = _unpack(plugin, result, options)
    return url, options


def _unpack(plugin: Any, result: Any, options: FetchOptions) -> Tuple[str, FetchOptions]:
    # PluginResult и обычный кортеж (url, options)
    if isinstance(result, tuple) and len(result) == 2:
        url, new_options = result
    else:
        raise PluginError(plugin, result)
    if not isinstance(url, str):
        raise PluginError(plugin, result)
    if new_options is None:
        new_options = options
    elif isinstance(new_options, dict):
        new_options = options.merge(new_options)
    elif not isinstance(new_options, FetchOptions):
        raise PluginError(plugin, result)
    return url, new_options
