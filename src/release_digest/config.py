"""YAML configuration for the digest CLI.

Example ``digest.yaml``:

    lookback_days: 7
    filter_window: true

A missing file means defaults. The path comes from ``--config`` or the
RELEASE_DIGEST_CONFIG environment variable.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from release_digest.window import DEFAULT_LOOKBACK_DAYS

CONFIG_ENV_VAR = "RELEASE_DIGEST_CONFIG"


class DigestConfig(BaseModel):
    """Settings for building a digest.

    Attributes:
        lookback_days: Length of the reporting window in days
        filter_window: Drop releases created outside the window before rendering
    """

    lookback_days: int = Field(DEFAULT_LOOKBACK_DAYS, ge=1)
    filter_window: bool = True


def load_config(path: str | Path | None = None) -> DigestConfig:
    """Load and validate a YAML digest config file.

    Args:
        path: Path to the YAML file. Falls back to RELEASE_DIGEST_CONFIG,
              then to defaults.

    Returns:
        A validated DigestConfig. Returns defaults if the file doesn't exist.

    Raises:
        ValueError: If the YAML content is invalid or fails validation.
    """
    path = path or os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return DigestConfig()

    config_path = Path(path)
    if not config_path.exists():
        return DigestConfig()

    try:
        raw = yaml.safe_load(config_path.read_text()) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc

    try:
        return DigestConfig.model_validate(raw)
    except ValidationError as exc:
        raise ValueError(f"Invalid digest config in {path}: {exc}") from exc
