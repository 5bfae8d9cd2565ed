"""Base Pydantic models for apivalidator.

This module provides the base model class that all apivalidator Pydantic models
inherit from. It establishes consistent configuration across all models:

- Strict field validation (no extra fields allowed)
- Immutable instances so validators and results can be shared between threads

Example:
    >>> from apivalidator.models import FrozenBaseModel
    >>>
    >>> class MyModel(FrozenBaseModel):
    ...     name: str
    >>>
    >>> MyModel(name="test").model_dump()
    {'name': 'test'}
"""

from pydantic import BaseModel, ConfigDict


class FrozenBaseModel(BaseModel):
    """Base model for all apivalidator Pydantic models.

    - extra="forbid": Rejects any fields not defined in the model
    - frozen=True: Makes instances immutable
    - populate_by_name=True: Fields with camelCase aliases accept both spellings
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)
