"""apivalidator validator - request and response validation pipeline.

This module validates the header, parameter and body of one API exchange
against the resources a schema registry declares for a route:

- Body decode method negotiated from the content-type
- Parameters always decoded as form-urlencoded, headers used as-is
- Structural validation by a pluggable engine (JSON Schema by default)
- Per-field outcomes aggregated into a `ValidationResult`

## Key Components

- `Validator`: orchestrates one validation pass
- `Decoder`: named decode methods with capability checks
- `ContentTypeResolver`: content-type negotiation
- `ValidationResult`: per-field outcomes, `is_valid()` and `errors()`

## Quick Example

```python
from apivalidator.validator import Validator

validator = Validator.for_response(engine="jsonschema")
result = validator.validate(
    "getUser",
    {"body": '{"name": "alice"}', "content_type": "application/json", "status_code": 200},
    schema,
)
for field, error in result.errors().items():
    print(field, error.message, error.attribute)
```
"""

from .config import ValidatorConfigModel, load_validator_config
from .core import Validator, build_encoding_plan, validate_request, validate_response
from .decoder import Decoder
from .engines import JsonSchemaEngine, available_engines, get_engine, register_engine
from .errors import DecodeError, NegotiationError, ValidatorError
from .models import (
    FIELD_KINDS,
    ByContentType,
    Direction,
    EngineErrorModel,
    ErrorDetailModel,
    ExchangeTargetModel,
    FieldKind,
    FieldOutcomeModel,
    FieldSpecModel,
    Forced,
    ResourceSpecModel,
    encoding_spec_from,
)
from .negotiation import DEFAULT_ENCODING_TABLE, ContentTypeResolver
from .result import ValidationResult, merge
from .types import EngineFactory, Route, SchemaRegistry, StructuralValidator

__all__ = [
    # Orchestration
    "Validator",
    "validate_request",
    "validate_response",
    "build_encoding_plan",
    # Decoding and negotiation
    "Decoder",
    "ContentTypeResolver",
    "DEFAULT_ENCODING_TABLE",
    # Results
    "ValidationResult",
    "merge",
    # Engines
    "JsonSchemaEngine",
    "register_engine",
    "get_engine",
    "available_engines",
    # Configuration
    "ValidatorConfigModel",
    "load_validator_config",
    # Errors
    "ValidatorError",
    "DecodeError",
    "NegotiationError",
    # Models
    "FIELD_KINDS",
    "FieldKind",
    "Direction",
    "ExchangeTargetModel",
    "FieldSpecModel",
    "ResourceSpecModel",
    "ByContentType",
    "Forced",
    "encoding_spec_from",
    "EngineErrorModel",
    "ErrorDetailModel",
    "FieldOutcomeModel",
    # Protocols
    "SchemaRegistry",
    "Route",
    "StructuralValidator",
    "EngineFactory",
]
