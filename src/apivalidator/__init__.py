"""apivalidator - schema-driven validation of API requests and responses.

This package validates one HTTP-like exchange (headers, parameters and body,
already parsed by the transport layer) against the per-route resource
definitions of a schema registry.

## Key Modules

### Validation (`apivalidator.validator`)
- `Validator`: orchestrates decoding, negotiation and structural validation
- `ValidationResult`: per-field outcomes with `is_valid()` / `errors()`
- `Decoder` and `ContentTypeResolver`: payload decoding and negotiation

### Schema registry (`apivalidator.schema`)
A reference registry loaded from YAML or JSON files. Any object implementing
the `SchemaRegistry` protocol can be used instead.

### Telemetry (`apivalidator.telemetry`)
Thin OpenTelemetry wrapper used to trace validations.

## Quick Example

```python
from apivalidator import validate_request
from apivalidator.schema import load_schema_from_file

schema = load_schema_from_file("api.yaml")
result = validate_request(
    "createUser",
    {"body": '{"name": "alice"}', "content_type": "application/json"},
    schema,
)
if not result.is_valid():
    print(result.errors())
```
"""

from .validator import (
    ValidationResult,
    Validator,
    validate_request,
    validate_response,
)
from .version import PACKAGE_NAME, PACKAGE_VERSION

__all__ = [
    "Validator",
    "ValidationResult",
    "validate_request",
    "validate_response",
    "PACKAGE_NAME",
    "PACKAGE_VERSION",
]
