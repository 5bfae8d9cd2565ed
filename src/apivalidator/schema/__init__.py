"""apivalidator schema - reference schema registry.

Routes and resources loaded from YAML or JSON. `SchemaModel` implements the
`SchemaRegistry` protocol consumed by `apivalidator.validator.Validator`.

Example schema file:

```yaml
title: Users API
resources:
  user:
    type: object
    properties:
      name: {type: string}
    required: [name]
routes:
  - name: createUser
    route: /users
    method: POST
    request:
      body: user
      encoding:
        application/json: json
    responses:
      201: {body: user}
```
"""

from .loaders import load_schema, load_schema_from_file
from .models import ResourceRefsModel, RouteModel, SchemaModel, resource_ref

__all__ = [
    "SchemaModel",
    "RouteModel",
    "ResourceRefsModel",
    "resource_ref",
    "load_schema",
    "load_schema_from_file",
]
