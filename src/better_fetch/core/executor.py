"""
Request/response lifecycle.

Одна логическая операция = одна или несколько попыток. Каждая попытка:
плагины -> нормализация -> транспорт -> декодирование или retry.
Повторы выполняются циклом, не рекурсией; у каждой попытки свой AbortController.
"""

import asyncio
import time
from typing import Any, Mapping, Optional, Union

from .abort import race_abort
from .capabilities import Capabilities, resolve_capabilities
from .context import RequestContext, ResponseContext
from .decoder import decode_error_body, decode_success
from .exceptions import FetchError, RequestTimeoutError
from .normalizer import normalize_request
from .options import FetchOptions, resolve_options
from .pipeline import apply_plugins, maybe_await
from .response import FetchResponse, to_fetch_response
from .result import FetchResult


async def better_fetch(
    url: str,
    options: Optional[Union[FetchOptions, Mapping[str, Any]]] = None,
    **overrides: Any,
) -> FetchResult:
    """
    Выполнить HTTP запрос.

    Args:
        url: URL (конкатенируется с options.base_url)
        options: FetchOptions или dict с полями FetchOptions
        **overrides: Поля FetchOptions, имеющие приоритет над options

    Returns:
        FetchResult(data, None) при успехе, FetchResult(None, error) при ok=False

    Raises:
        FetchError: ok=False и throw=True (после исчерпания retry)
        TransportError: Сбой сети или отмена запроса (в т.ч. RequestTimeoutError)
        InvalidURLError: base_url + url не является абсолютным URL
        Exception: Ошибки плагинов, парсера и валидатора пробрасываются как есть

    Example:
        >>> data, error = await better_fetch(
        ...     "/signin",
        ...     base_url="https://api.example.com",
        ...     body={"username": "a", "password": "b"},
        ... )
    """
    call_options = resolve_options(options, **overrides)
    attempt = 0

    while True:
        attempt_url, attempt_options = await apply_plugins(call_options.plugins, url, call_options)

        capabilities = resolve_capabilities(attempt_options)
        controller = capabilities.abort_controller()
        request_url, request_options = normalize_request(
            attempt_url, attempt_options, capabilities, controller.signal
        )
        context = RequestContext(
            url=request_url,
            method=request_options.method,
            headers=request_options.headers,
            body=request_options.body,
            controller=controller,
            options=request_options,
            attempt=attempt,
        )

        response = await _execute(context, capabilities)
        response_context = ResponseContext(response=response, request=context)
        await _invoke(request_options.on_response, response_context)

        if response.ok:
            return await _succeed(response_context, request_options)

        await _invoke(request_options.on_error, response_context)

        remaining = request_options.retry or 0
        if remaining > 0:
            logger = request_options.logger
            if logger:
                logger.warning(
                    "Retrying request",
                    method=context.method,
                    url=context.url,
                    status_code=response.status,
                    attempt=attempt + 1,
                    retries_left=remaining - 1,
                )
            await _invoke(request_options.on_retry, response_context)
            call_options = call_options.replace(retry=remaining - 1)
            attempt += 1
            continue

        return await _fail(response, request_options)


async def _execute(context: RequestContext, capabilities: Capabilities) -> FetchResponse:
    options = context.options
    logger = options.logger

    # Таймаут ставится только если внешний signal не передан
    timer: Optional[asyncio.TimerHandle] = None
    if options.timeout and context.signal is context.controller.signal:
        loop = asyncio.get_running_loop()
        timer = loop.call_later(
            options.timeout,
            context.controller.abort,
            RequestTimeoutError(options.timeout, context.url),
        )

    start = time.monotonic()
    try:
        await _invoke(options.on_request, context)
        if logger:
            logger.debug(
                "Request started",
                method=context.method,
                url=context.url,
                attempt=context.attempt,
                request_id=context.request_id,
            )
        raw = await race_abort(
            capabilities.fetch(context.url, options),
            context.signal,
            context.url,
        )
    finally:
        if timer is not None:
            timer.cancel()

    response = to_fetch_response(raw)
    if logger:
        logger.debug(
            "Response received",
            method=context.method,
            url=context.url,
            status_code=response.status,
            duration_ms=round((time.monotonic() - start) * 1000, 2),
            request_id=context.request_id,
        )
    return response


async def _succeed(response_context: ResponseContext, options: FetchOptions) -> FetchResult:
    response = response_context.response
    if response.body is None or options.method.upper() == "HEAD":
        await _invoke(options.on_success, response_context)
        return FetchResult.success({})

    data = await decode_success(response, options)
    await _invoke(options.on_success, response_context)
    return FetchResult.success(data)


async def _fail(response: FetchResponse, options: FetchOptions) -> FetchResult:
    body = await decode_error_body(response, options)

    if options.logger:
        options.logger.warning(
            "Request failed",
            url=response.url,
            status_code=response.status,
            status_text=response.status_text,
        )

    if options.throw:
        raise FetchError(response.status, response.status_text, body or None)
    return FetchResult.failure(response.status, response.status_text, body)


async def _invoke(hook: Any, context: Any) -> None:
    if hook is not None:
        await maybe_await(hook(context))
