"""Add-on options document (/data/options.json)."""

import json
from pathlib import Path

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .config import WHITELIST_KEYS
from .telemetry import get_logger

logger = get_logger(__name__)


class OptionsError(ValueError):
    """Options file exists but cannot be used (unreadable, malformed, wrong types)."""


class AddonOptions(BaseModel):
    """Whitelisted keys of the add-on options document.

    Keys outside the whitelist are dropped on validation.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    SURREAL_URL: str | None = None
    SHOPIFY_URL: str | None = None
    SHOPIFY_ACCESS_TOKEN: str | None = None
    ETSY_KEYSTRING: str | None = None
    ETSY_SECRET: str | None = None
    ETSY_SHOP_ID: str | None = None

    @field_validator(*WHITELIST_KEYS, mode="before")
    @classmethod
    def _coerce_scalar(cls, value):
        """Render scalars the way `jq '.KEY // empty'` prints them.

        false/null are empty; objects, arrays and NUL-bearing strings are rejected.
        """
        if value is None or value is False:
            return None
        if value is True:
            return "true"
        if isinstance(value, (int, float)):
            return json.dumps(value)
        if isinstance(value, str):
            if "\x00" in value:
                raise ValueError("contains a NUL character")
            return value
        raise ValueError(f"expected a scalar, got {type(value).__name__}")

    def exports(self) -> dict[str, str]:
        """Non-empty whitelisted values, in whitelist order."""
        values = self.model_dump()
        return {key: values[key] for key in WHITELIST_KEYS if values[key]}


def load_options(path: str | Path) -> AddonOptions | None:
    """Load the options document.

    Args:
        path: Path to options.json

    Returns:
        AddonOptions, or None if there is no regular file at path.

    Raises:
        OptionsError: If the file is unreadable, not a JSON object, or a
            whitelisted key holds an object/array.
    """
    path = Path(path)
    if not path.is_file():
        return None

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise OptionsError(f"Cannot read {path}: {e}") from e

    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, over-long integers, excessive nesting
        raise OptionsError(f"Malformed JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise OptionsError(f"Expected a JSON object in {path}, got {type(data).__name__}")

    try:
        return AddonOptions.model_validate(data)
    except ValidationError as e:
        # Field names only: error details would echo the (secret) input values
        fields = ", ".join(sorted({str(err["loc"][0]) for err in e.errors()}))
        raise OptionsError(f"Invalid value type in {path} for: {fields}") from e


def load_env_file(path: str | Path) -> dict[str, str]:
    """Read whitelisted, non-empty keys from a dotenv file.

    Args:
        path: Path to a .env file

    Returns:
        Mapping of key -> value in whitelist order; empty if the file is missing.
    """
    path = Path(path)
    if not path.is_file():
        logger.warning(f"No env file found at {path}")
        return {}

    values = dotenv_values(path)
    return {key: values[key] for key in WHITELIST_KEYS if values.get(key)}
