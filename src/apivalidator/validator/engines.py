"""Structural validator engines.

Engines are selected by name from an explicit registry. The default
``jsonschema`` engine validates decoded values with the jsonschema library
and reports the most relevant error.
"""

import logging
from collections.abc import Iterable
from typing import Any

from jsonschema import Draft7Validator, validators
from jsonschema.exceptions import ValidationError as JsonSchemaValidationError
from jsonschema.exceptions import best_match

from .models import EngineErrorModel
from .types import EngineFactory

logger = logging.getLogger(__name__)

DEFAULT_ENGINE = "jsonschema"


def _pointer(parts: Iterable[Any]) -> str:
    return "".join(f"/{str(part).replace('~', '~0').replace('/', '~1')}" for part in parts)


class JsonSchemaEngine:
    """Validates values against a JSON Schema definition.

    The draft is picked from the definition's ``$schema`` keyword, falling
    back to Draft 7. Local ``$ref``s resolve against the definition itself.

    Example:
        >>> engine = JsonSchemaEngine({"type": "object", "properties": {"name": {"type": "string"}}})
        >>> engine.validate({"name": 1})[1].attribute
        '$.name'
    """

    def __init__(self, definition: dict[str, Any]):
        self.definition = definition
        cls = validators.validator_for(definition, default=Draft7Validator)
        self._validator = cls(definition, format_checker=cls.FORMAT_CHECKER)

    def validate(self, value: Any) -> tuple[bool, EngineErrorModel | None]:
        error: JsonSchemaValidationError | None = best_match(self._validator.iter_errors(value))
        if error is None:
            return True, None

        return False, EngineErrorModel(
            attribute=error.json_path,
            position=_pointer(error.absolute_schema_path),
            reason=error.message,
        )


_ENGINES: dict[str, EngineFactory] = {
    DEFAULT_ENGINE: JsonSchemaEngine,
}


def register_engine(name: str, factory: EngineFactory) -> None:
    """Make an engine available under ``name``.

    The registry is module-wide and not locked: register engines during
    application setup, before validators are created or used from threads.
    """
    logger.debug(f"Registering validator engine '{name}'")
    _ENGINES[name] = factory


def get_engine(name: str) -> EngineFactory:
    """Look up a registered engine factory.

    Raises:
        ValueError: If no engine is registered under ``name``
    """
    try:
        return _ENGINES[name]
    except KeyError:
        raise ValueError(
            f"Unknown validator engine: {name}. Available: {', '.join(sorted(_ENGINES))}"
        ) from None


def available_engines() -> list[str]:
    return sorted(_ENGINES)
