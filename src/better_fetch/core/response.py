"""
FetchResponse - transport-neutral response wrapper.

Transports return FetchResponse; custom transports may return an
``httpx.Response`` or ``requests.Response`` and the executor wraps it.
"""

import codecs
import email.parser
import email.policy
from typing import Any, AsyncIterator, List, Mapping, Optional, Tuple, Union
from urllib.parse import parse_qsl

import httpx
import requests

# Статусы, у которых по определению нет тела
NULL_BODY_STATUSES = frozenset({101, 103, 204, 205, 304})

FormData = List[Tuple[str, Union[str, bytes]]]


class FetchResponse:
    """
    Ответ транспорта с fetch-подобным интерфейсом.

    Attributes:
        status: HTTP статус код
        status_text: Reason phrase
        headers: Заголовки ответа (case-insensitive)
        url: Итоговый URL (после редиректов)
        raw: Исходный объект ответа библиотеки

    Example:
        >>> response = FetchResponse(200, "OK", {"content-type": "text/plain"}, b"hi")
        >>> response.ok
        True
        >>> await response.text()
        'hi'
    """

    def __init__(
        self,
        status: int,
        status_text: str,
        headers: Optional[Mapping[str, str]] = None,
        content: Optional[bytes] = b"",
        *,
        url: str = "",
        encoding: Optional[str] = None,
        method: str = "GET",
        raw: Any = None,
    ):
        self.status = status
        self.status_text = status_text
        self.headers = httpx.Headers(headers or {})
        self.url = url
        self.raw = raw
        self._encoding = encoding
        if status in NULL_BODY_STATUSES or method.upper() == "HEAD":
            content = None
        self._content = content

    # ==================== Метаданные ====================

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def body(self) -> Optional[AsyncIterator[bytes]]:
        """Поток тела ответа или None для ответов без тела."""
        if self._content is None:
            return None
        return self._iter_content()

    @property
    def content_type(self) -> Optional[str]:
        return self.headers.get("content-type")

    # ==================== Декодирование ====================

    async def text(self) -> str:
        if not self._content:
            return ""
        return self._content.decode(self._charset(), errors="replace")

    async def blob(self) -> bytes:
        return self._content or b""

    async def array_buffer(self) -> bytearray:
        return bytearray(self._content or b"")

    async def form_data(self) -> FormData:
        """
        Разобрать тело как форму.

        Поддерживает application/x-www-form-urlencoded и multipart/form-data.
        Файловые части multipart возвращаются как bytes.
        """
        content_type = (self.content_type or "").lower()
        if content_type.startswith("multipart/"):
            return self._parse_multipart()
        return parse_qsl(await self.text(), keep_blank_values=True)

    async def stream(self) -> AsyncIterator[bytes]:
        return self._iter_content()

    async def _iter_content(self) -> AsyncIterator[bytes]:
        if self._content:
            yield self._content

    def _charset(self) -> str:
        charset = self._declared_charset()
        try:
            codecs.lookup(charset)
        except LookupError:
            # Неизвестная кодировка от сервера
            return "utf-8"
        return charset

    def _declared_charset(self) -> str:
        if self._encoding:
            return self._encoding
        content_type = self.content_type or ""
        for part in content_type.split(";")[1:]:
            key, _, value = part.strip().partition("=")
            if key.lower() == "charset" and value:
                return value.strip('"')
        return "utf-8"

    def _parse_multipart(self) -> FormData:
        header = f"Content-Type: {self.content_type}\r\n\r\n".encode("latin-1")
        message = email.parser.BytesParser(policy=email.policy.HTTP).parsebytes(
            header + (self._content or b"")
        )
        fields: FormData = []
        for part in message.iter_parts():
            name = part.get_param("name", header="content-disposition")
            if name is None:
                continue
            payload = part.get_payload(decode=True) or b""
            if part.get_filename() is None:
                payload = payload.decode(part.get_content_charset() or "utf-8")
            fields.append((name, payload))
        return fields

    # ==================== Конструкторы ====================

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "FetchResponse":
        try:
            request = response.request
        except RuntimeError:
            # Ответ собран вручную (например, в тестах) без привязки к запросу
            request = None
        return cls(
            status=response.status_code,
            status_text=response.reason_phrase,
            headers=response.headers,
            content=response.content,
            url=str(request.url) if request is not None else "",
            encoding=response.charset_encoding,
            method=request.method if request is not None else "GET",
            raw=response,
        )

    @classmethod
    def from_requests(cls, response: Any) -> "FetchResponse":
        request = response.request
        return cls(
            status=response.status_code,
            status_text=response.reason or "",
            headers=dict(response.headers),
            content=response.content,
            url=response.url or "",
            encoding=response.encoding,
            method=request.method if request is not None else "GET",
            raw=response,
        )

    def __repr__(self):
        return f"<FetchResponse [{self.status} {self.status_text}]>"


def to_fetch_response(response: Any) -> FetchResponse:
    """Привести ответ произвольного транспорта к FetchResponse."""
    if isinstance(response, FetchResponse):
        return response
    if isinstance(response, httpx.Response):
        return FetchResponse.from_httpx(response)
    if isinstance(response, requests.Response):
        return FetchResponse.from_requests(response)
    raise TypeError(
        f"Transport returned unsupported response type: {type(response).__name__}"
    )

