# stylecoach/common/typed_config/reader.py
#
# TypedConfigReader and JSON config file loading.

from __future__ import annotations

import json
import logging
import os
from typing import Any

from stylecoach.common.errors import ConfigError
from stylecoach.common.typed_config.models import ClassifierConfig

logger = logging.getLogger(__name__)

CLASSIFIER_SECTION = "classifier"


class TypedConfigReader:
    """Typed config reader.

    Calls from_dict() on every access, so it always reflects the current
    dict. Section dicts are copied before parsing.

    Usage:
        reader = TypedConfigReader(config_dict)
        classifier = reader.get_classifier()  # ClassifierConfig
    """

    def __init__(self, config_dict: dict[str, Any]) -> None:
        """Keep a reference to the config dict (no copy).

        Args:
            config_dict: Full settings dict
        """
        self._config = config_dict

    def get_classifier(self) -> ClassifierConfig:
        """Get classifier settings.

        Returns:
            Validated ClassifierConfig (frozen)

        Raises:
            ConfigError: If a threshold is out of range.
        """
        raw = self._config.get(CLASSIFIER_SECTION)
        snapshot = dict(raw) if isinstance(raw, dict) else {}
        return ClassifierConfig.from_dict(snapshot).validate()


def load_config_file(path: str | os.PathLike[str]) -> ClassifierConfig:
    """Load ClassifierConfig from a JSON config file.

    A missing file yields defaults. The file may hold either a full settings
    dict with a "classifier" section or the classifier section itself.

    Raises:
        ConfigError: If the file is not valid JSON or not an object.
    """
    if not os.path.exists(path):
        logger.debug("Config file %s not found, using defaults", path)
        return ClassifierConfig().validate()

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}", context={"path": str(path)}) from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object", context={"path": str(path)})

    if CLASSIFIER_SECTION not in data:
        data = {CLASSIFIER_SECTION: data}
    return TypedConfigReader(data).get_classifier()
