"""Configuration for apivalidator validators.

Configuration is optional: every setting has a default. When present it is
read from a YAML file with a top-level ``validator`` section:

```yaml
validator:
  engine: jsonschema
  unknown_route: allow   # or "reject"
  default_encoding:
    application/json: json
    application/x-www-form-urlencoded: form-urlencoded
```
"""

import logging
import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field, ValidationError

from apivalidator.models import FrozenBaseModel

from .engines import DEFAULT_ENGINE
from .negotiation import DEFAULT_ENCODING_TABLE

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "APIVALIDATOR_CONFIG"
DEFAULT_CONFIG_FILE = "apivalidator.yaml"


class ValidatorConfigModel(FrozenBaseModel):
    """Validator settings.

    Attributes:
        engine: Name of the structural validator engine.
        unknown_route: ``allow`` treats a route unknown to the schema as valid,
            ``reject`` marks every present field invalid.
        default_encoding: Content-type table used when a route declares no
            body encoding.
    """

    engine: str = DEFAULT_ENGINE
    unknown_route: Literal["allow", "reject"] = "allow"
    default_encoding: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_ENCODING_TABLE))


def load_validator_config(config_path: Path | str | None = None) -> ValidatorConfigModel:
    """Load validator configuration.

    Args:
        config_path: Optional path to the YAML file. If not provided, looks for:
                    1. APIVALIDATOR_CONFIG environment variable
                    2. ./apivalidator.yaml

    Returns:
        ValidatorConfigModel, with defaults when no file is found

    Raises:
        FileNotFoundError: If an explicitly configured file doesn't exist
        ValueError: If the file cannot be parsed or the config is invalid
    """
    if config_path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            config_path = Path(env_path)
        else:
            candidate = Path.cwd() / DEFAULT_CONFIG_FILE
            if not candidate.exists():
                logger.debug("No validator config file found, using defaults")
                return ValidatorConfigModel()
            config_path = candidate

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Validator config file not found at {config_path}")

    logger.debug(f"Loading validator config from: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML config file {config_path}: {e}") from e

    if not raw_config:
        return ValidatorConfigModel()
    if not isinstance(raw_config, dict):
        raise ValueError(f"Invalid validator config in {config_path}: expected a mapping")

    section: Any = raw_config.get("validator", {})
    try:
        return ValidatorConfigModel.model_validate(section or {})
    except ValidationError as e:
        raise ValueError(f"Invalid validator config: {e}") from e
