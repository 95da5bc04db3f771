# src/better_fetch/utils/__init__.py
from .sanitizer import add_sensitive_keys, mask_sensitive_data, mask_url

__all__ = [
    "add_sensitive_keys",
    "mask_sensitive_data",
    "mask_url",
]
