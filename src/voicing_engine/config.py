"""Configuration — load scoring weights from the packaged YAML cost file.

The default file is ``configs/voicing_costs.yaml`` next to this module.
No hardcoded fallbacks: a missing file or a missing key is an error.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent / "configs" / "voicing_costs.yaml"


def load_section(
    section: str,
    required_keys: Iterable[str],
    config_path: str | Path | None = None,
) -> dict[str, Any]:
    """Read one top-level section of a cost file and validate its keys.

    Args:
        section: Top-level key, e.g. ``"difficulty"`` or ``"transition"``.
        required_keys: Keys that must be present inside the section.
        config_path: YAML file to read. Defaults to :data:`DEFAULT_CONFIG_PATH`.

    Returns:
        The section mapping.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the section or any required key is missing.
    """
    path = DEFAULT_CONFIG_PATH if config_path is None else Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Cost config not found: {path}")

    with open(path, "r", encoding="utf-8") as fh:
        cfg = yaml.safe_load(fh) or {}

    values = cfg.get(section)
    if not isinstance(values, dict):
        raise ValueError(f"Missing section '{section}' in cost config: {path}")

    for key in required_keys:
        if key not in values:
            raise ValueError(
                f"Missing required key '{section}.{key}' in cost config: {path}"
            )

    logger.info("Loaded '%s' weights from %s", section, path)
    return values
