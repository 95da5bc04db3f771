# src/better_fetch/utils/sanitizer.py
"""
Маскирование чувствительных данных перед записью в лог.

Применяется к extra-полям FetchLogger, URL запросов и заголовкам.
"""

import re
from typing import Any, Dict, Mapping

import httpx

MASK = "***REDACTED***"

# Список чувствительных ключей (case-insensitive, частичное совпадение)
SENSITIVE_KEYS = {
    'password', 'passwd', 'pwd', 'secret',
    'token', 'jwt', 'api_key', 'apikey', 'x-api-key', 'private_key',
    'authorization', 'proxy-authorization',
    'cookie', 'set-cookie', 'session', 'csrf', 'xsrf',
    'credentials', 'client_secret',
    'credit_card', 'card_number', 'cvv', 'ssn', 'otp', 'pin_code',
}

# Паттерны в свободном тексте
SENSITIVE_PATTERNS = [
    (re.compile(r'(Bearer\s+)([A-Za-z0-9\-._~+/]+=*)', re.IGNORECASE), r'\1' + MASK),
    (re.compile(r'(Basic\s+)([A-Za-z0-9+/]+=*)', re.IGNORECASE), r'\1' + MASK),
    (re.compile(r'((?:api[_-]?key|token|password)[\s:=]+)([^\s&,;]+)', re.IGNORECASE), r'\1' + MASK),
]


def is_sensitive_key(key: Any) -> bool:
    key_lower = str(key).lower()
    return any(sensitive in key_lower for sensitive in SENSITIVE_KEYS)


def mask_sensitive_data(data: Any, mask: str = MASK) -> Any:
    """
    Рекурсивно маскирует чувствительные данные в словарях, списках, строках.

    Args:
        data: Данные для маскирования
        mask: Строка-заменитель

    Returns:
        Копия данных с замаскированными полями; прочие объекты - как есть

    Examples:
        >>> mask_sensitive_data({"username": "alice", "password": "secret123"})
        {'username': 'alice', 'password': '***REDACTED***'}
        >>> mask_sensitive_data("Authorization: Bearer abc.def")
        'Authorization: Bearer ***REDACTED***'
    """
    if data is None or isinstance(data, (bool, int, float)):
        return data

    if isinstance(data, str):
        for pattern, replacement in SENSITIVE_PATTERNS:
            data = pattern.sub(replacement.replace(MASK, mask), data)
        return data

    if isinstance(data, Mapping):
        return _mask_mapping(data, mask)

    if isinstance(data, (list, tuple)):
        return type(data)(mask_sensitive_data(item, mask) for item in data)

    return data


def _mask_mapping(data: Mapping[Any, Any], mask: str) -> Dict[Any, Any]:
    return {
        key: mask if is_sensitive_key(key) else mask_sensitive_data(value, mask)
        for key, value in data.items()
    }


def mask_url(url: str, mask: str = MASK) -> str:
    """
    Маскирует пароль в userinfo и чувствительные query параметры.

    Examples:
        >>> masked = mask_url("https://api.example.com/items?api_key=secret123&page=1")
        >>> "secret123" in masked, "page=1" in masked
        (False, True)
    """
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL:
        return mask_sensitive_data(url, mask)

    if parsed.password:
        parsed = parsed.copy_with(password=mask)

    if parsed.query:
        params = [
            (key, mask if is_sensitive_key(key) else value)
            for key, value in parsed.params.multi_items()
        ]
        parsed = parsed.copy_with(params=params)

    return str(parsed)


def add_sensitive_keys(*keys: str) -> None:
    """
    Расширить список чувствительных ключей.

    Example:
        >>> add_sensitive_keys('internal_token', 'company_secret')
    """
    for key in keys:
        SENSITIVE_KEYS.add(key.lower())
