"""Validation orchestration for API requests and responses."""

import logging
import time
from collections.abc import Mapping
from pathlib import Path
from typing import Any, cast

from apivalidator.telemetry import record_counter, record_histogram, traced_operation

from .config import ValidatorConfigModel, load_validator_config
from .decoder import FORM_URLENCODED, IDENTITY, Decoder
from .engines import get_engine
from .errors import DecodeError, NegotiationError
from .models import (
    Direction,
    ErrorDetailModel,
    ExchangeTargetModel,
    FieldKind,
    FieldOutcomeModel,
    FieldSpecModel,
)
from .negotiation import ContentTypeResolver
from .result import ValidationResult
from .types import EngineFactory, SchemaRegistry

logger = logging.getLogger(__name__)

EncodingPlan = dict[FieldKind, str | None]


def build_encoding_plan(body_encoding: str | None) -> EncodingPlan:
    """Decode method per field-kind.

    Headers arrive already parsed and parameters are always form-urlencoded;
    only the body depends on negotiation.
    """
    return {
        "header": IDENTITY,
        "parameter": FORM_URLENCODED,
        "body": body_encoding,
    }


class Validator:
    """Validates one side of an API exchange against a schema registry.

    For each field-kind present in the exchange and constrained by the
    route, the raw value is decoded, checked by the structural validator
    engine and recorded in a `ValidationResult`. Problems with the exchange
    never raise: they are reported as invalid outcomes.

    A validator keeps no per-call state and can be shared between threads.

    Settings come from the ``config`` argument only; use `from_config` to
    read them from ``APIVALIDATOR_CONFIG`` or ``./apivalidator.yaml``.

    Example:
        >>> validator = Validator.for_request()
        >>> result = validator.validate(
        ...     "createUser",
        ...     {"body": '{"name": "a"}', "content_type": "application/json"},
        ...     schema,
        ... )
        >>> result.is_valid()
        True
    """

    def __init__(
        self,
        direction: Direction,
        *,
        engine: str | EngineFactory | None = None,
        decoder: Decoder | None = None,
        resolver: ContentTypeResolver | None = None,
        config: ValidatorConfigModel | None = None,
    ):
        """Initialize the validator.

        Args:
            direction: Whether requests or responses are validated
            engine: Engine name or factory, overriding ``config.engine``
            decoder: Decoder providing the decode methods
            resolver: Content-type resolver; built from ``decoder`` and
                ``config.default_encoding`` when omitted
            config: Validator settings

        Raises:
            ValueError: If the engine name is not registered
        """
        self.direction = direction
        self.config = config or ValidatorConfigModel()
        self.decoder = decoder or Decoder()
        self.resolver = resolver or ContentTypeResolver(
            self.decoder, self.config.default_encoding
        )

        engine = engine if engine is not None else self.config.engine
        self.engine_factory: EngineFactory = get_engine(engine) if isinstance(engine, str) else engine

    @classmethod
    def for_request(cls, **kwargs: Any) -> "Validator":
        return cls(Direction.REQUEST, **kwargs)

    @classmethod
    def for_response(cls, **kwargs: Any) -> "Validator":
        return cls(Direction.RESPONSE, **kwargs)

    @classmethod
    def from_config(
        cls,
        direction: Direction,
        config_path: Path | str | None = None,
        **kwargs: Any,
    ) -> "Validator":
        """Create a validator with settings loaded by `load_validator_config`.

        Raises:
            FileNotFoundError: If an explicitly configured file doesn't exist
            ValueError: If the config is invalid or names an unknown engine
        """
        return cls(direction, config=load_validator_config(config_path), **kwargs)

    def validate(
        self,
        route_name: str,
        target: ExchangeTargetModel | Mapping[str, Any],
        schema: SchemaRegistry,
    ) -> ValidationResult:
        """Validate an exchange against the route's resources.

        Args:
            route_name: Name of the route in ``schema``
            target: Header/parameter/body material to validate
            schema: Registry providing the route definitions

        Returns:
            ValidationResult with one outcome per validated field-kind
        """
        if not isinstance(target, ExchangeTargetModel):
            target = ExchangeTargetModel.model_validate(target)

        start = time.perf_counter()
        with traced_operation(
            "apivalidator.validate",
            {"apivalidator.route": route_name, "apivalidator.direction": self.direction.value},
        ) as span:
            result = self._validate(route_name, target, schema)
            span.set_attribute("apivalidator.valid", result.is_valid())
            span.set_attribute("apivalidator.invalid_fields", sorted(result.errors()))

        attributes = {
            "route": route_name,
            "direction": self.direction.value,
            "valid": result.is_valid(),
        }
        record_counter(
            "apivalidator.validations",
            attributes=attributes,
            description="Number of validated exchanges",
        )
        record_histogram(
            "apivalidator.validation.duration",
            time.perf_counter() - start,
            attributes=attributes,
            description="Time spent validating one exchange",
        )
        return result

    def _validate(
        self, route_name: str, target: ExchangeTargetModel, schema: SchemaRegistry
    ) -> ValidationResult:
        present = target.present_fields()
        if not present:
            return ValidationResult.all_valid([])

        route = schema.find_route(route_name)
        if route is None:
            return self._unknown_route(route_name, present)

        status_codes: list[int] = []
        if self.direction is Direction.RESPONSE and target.status_code:
            status_codes = [target.status_code]

        resource_spec = route.resource_spec_for(
            self.direction, schema.get_resource_root(), status_codes, present
        )
        fields = [kind for kind in present if resource_spec.defines(kind)]
        logger.debug(f"Route '{route_name}' constrains {fields} of present {present}")

        body_encoding: str | None = None
        if target.body:
            try:
                body_encoding = self.resolver.resolve(
                    target.content_type,
                    resource_spec.encoding if resource_spec.body is not None else None,
                )
            except NegotiationError as e:
                if resource_spec.body is not None:
                    logger.debug(f"Body negotiation failed for route '{route_name}': {e}")
                    return ValidationResult.single_error("body", e.to_detail())
                logger.debug(f"Ignoring body negotiation failure for unconstrained body: {e}")

        plan = build_encoding_plan(body_encoding)

        result = ValidationResult.empty()
        for kind in fields:
            # A constrained body always has a negotiated method at this point
            method = cast(str, plan[kind])
            spec = cast(FieldSpecModel, resource_spec.get(kind))
            outcome = self._validate_field(method, target.field(kind), spec)
            result = result.merge(ValidationResult(outcomes={kind: outcome}))
        return result

    def _validate_field(
        self, method: str, raw: Any, spec: FieldSpecModel
    ) -> FieldOutcomeModel:
        """Decode one field and check it against its definition."""
        try:
            value = self.decoder.decode(method, raw)
        except DecodeError:
            return FieldOutcomeModel.invalid(
                ErrorDetailModel(message=f"failed to parse {method}", encoding=method)
            )

        engine = self.engine_factory(spec.definition)
        valid, error = engine.validate(value)
        if valid:
            return FieldOutcomeModel.ok()

        return FieldOutcomeModel.invalid(
            ErrorDetailModel(
                message=f"contents do not match resource '{spec.title}'",
                attribute=error.attribute if error else None,
                position=error.position if error else None,
                reason=error.reason if error else None,
                encoding=method,
            )
        )

    def _unknown_route(self, route_name: str, present: list[FieldKind]) -> ValidationResult:
        if self.config.unknown_route == "allow":
            logger.debug(f"Route '{route_name}' not found, treating exchange as valid")
            return ValidationResult.all_valid(present)

        logger.debug(f"Route '{route_name}' not found, rejecting exchange")
        detail = ErrorDetailModel(message=f"unknown route '{route_name}'")
        return ValidationResult(
            outcomes={kind: FieldOutcomeModel.invalid(detail) for kind in present}
        )


def validate_request(
    route_name: str,
    target: ExchangeTargetModel | Mapping[str, Any],
    schema: SchemaRegistry,
) -> ValidationResult:
    """Validate a request with a default validator."""
    return Validator.for_request().validate(route_name, target, schema)


def validate_response(
    route_name: str,
    target: ExchangeTargetModel | Mapping[str, Any],
    schema: SchemaRegistry,
) -> ValidationResult:
    """Validate a response with a default validator."""
    return Validator.for_response().validate(route_name, target, schema)
