"""Payload decoding for apivalidator.

Each decode method turns a raw field value into the structured value handed
to the validator engine. Methods are looked up by name in an explicit
per-instance registry, so negotiation can check capability without decoding.
"""

import json
import logging
from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import parse_qsl

from .errors import DecodeError

logger = logging.getLogger(__name__)

IDENTITY = "identity"
JSON = "json"
FORM_URLENCODED = "form-urlencoded"

DecodeFunc = Callable[[Any], Any]


def decode_identity(raw: Any) -> Any:
    return raw


def decode_json(raw: str | bytes) -> Any:
    """Parse UTF-8 JSON text."""
    if isinstance(raw, bytes | bytearray):
        raw = raw.decode("utf-8")
    return json.loads(raw)


def decode_form_urlencoded(raw: str | bytes | Mapping[str, Any]) -> dict[str, Any]:
    """Parse ``a=1&b=2`` text into a mapping.

    A key that appears more than once maps to the list of its values.
    Already-parsed mappings are passed through as a plain dict.
    """
    if isinstance(raw, Mapping):
        return dict(raw)
    if isinstance(raw, bytes | bytearray):
        raw = raw.decode("utf-8")

    params: dict[str, Any] = {}
    for key, value in parse_qsl(raw, keep_blank_values=True, strict_parsing=False):
        if key not in params:
            params[key] = value
        elif isinstance(params[key], list):
            params[key].append(value)
        else:
            params[key] = [params[key], value]
    return params


class Decoder:
    """Registry of named decode methods.

    Example:
        >>> decoder = Decoder()
        >>> decoder.supports("json")
        True
        >>> decoder.decode("form-urlencoded", "a=1&a=2&b=3")
        {'a': ['1', '2'], 'b': '3'}
    """

    def __init__(self, methods: Mapping[str, DecodeFunc] | None = None):
        """Initialize the decoder.

        Args:
            methods: Extra or overriding methods on top of the built-ins
        """
        self._methods: dict[str, DecodeFunc] = {
            IDENTITY: decode_identity,
            JSON: decode_json,
            FORM_URLENCODED: decode_form_urlencoded,
        }
        if methods:
            self._methods.update(methods)

    def register(self, name: str, func: DecodeFunc) -> None:
        """Register a decode method under ``name``."""
        self._methods[name] = func

    def supports(self, name: str) -> bool:
        return name in self._methods

    @property
    def methods(self) -> list[str]:
        return sorted(self._methods)

    def decode(self, name: str, raw: Any) -> Any:
        """Decode ``raw`` with the method called ``name``.

        Raises:
            DecodeError: If the method is unknown or cannot parse ``raw``
        """
        func = self._methods.get(name)
        if func is None:
            raise DecodeError(name, f"unknown decode method: {name}")
        try:
            return func(raw)
        except (ValueError, TypeError, RecursionError) as e:
            # json.JSONDecodeError and UnicodeDecodeError are ValueErrors,
            # deeply nested JSON exhausts the recursion limit
            logger.debug(f"Decode method '{name}' failed: {e}")
            raise DecodeError(name) from e
