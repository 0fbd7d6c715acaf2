"""
Import configuration loading.

The configuration is a JSON document validated into ImportConfig. Relative source file
names are resolved against the directory holding the configuration file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from pydantic import ValidationError

from pyx_shared.exceptions import ConfigurationError
from pyx_shared.models.import_config import ImportConfig


def load_import_config(path: Union[str, Path]) -> ImportConfig:
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigurationError(
            f"Unable to open configuration file {config_path.absolute()} for reading.",
            details={"path": str(config_path)},
        )

    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Unable to load configuration file {config_path}: {e}",
            details={"path": str(config_path)},
        ) from e

    try:
        config = ImportConfig.model_validate_json(raw)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid import configuration {config_path}: {e}",
            details={"path": str(config_path), "errors": e.errors(include_url=False)},
        ) from e

    base_dir = config_path.parent
    for file_config in config.files:
        source = Path(file_config.name)
        if not source.is_absolute():
            file_config.name = str(base_dir / source)

    # fail early on a replacement table that would corrupt its own output
    config.replacement_table()
    return config
