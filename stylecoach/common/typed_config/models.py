# stylecoach/common/typed_config/models.py
#
# Frozen dataclass definitions and type-coercion helpers.

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from stylecoach.common.errors import ConfigError
from stylecoach.common.lexicon.store import DEFAULT_LEXICON_VERSION

DEFAULT_DOMINANCE_THRESHOLD = 40.0
DEFAULT_HYBRID_THRESHOLD = 25.0


# =============================================================================
# Helper Functions
# =============================================================================


def safe_float(value: Any, default: float) -> float:
    """float conversion. None/bool/unparsable values return default.

    Args:
        value: Value to convert
        default: Value returned when conversion fails

    Returns:
        Converted float, or default

    Note:
        bool is a subclass of int but intentionally returns default.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def safe_str(value: Any, default: str) -> str:
    """String conversion. None/empty/non-str values return default.

    Note:
        None returns default explicitly to avoid str(None) == "None".
    """
    if value is None:
        return default
    if not isinstance(value, str):
        return default
    if not value.strip():
        return default
    return value.strip()


def _first_present(d: dict[str, Any], *keys: str) -> Any:
    """Return the value of the first key present in d (None if none)."""
    for key in keys:
        if key in d:
            return d[key]
    return None


# =============================================================================
# Dataclasses
# =============================================================================


@dataclass(frozen=True)
class ClassifierConfig:
    """Classifier settings ("classifier" section).

    Thread-safety: Immutable (frozen=True)

    Attributes:
        dominance_threshold: Minimum primary percent for a "pure" profile (0-100)
        hybrid_threshold: Minimum secondary percent for a "hybrid" profile (0-100)
        lexicon_version: Lexicon version used for extraction

    Note:
        from_dict() reads both snake_case keys and the camelCase option names
        (dominanceThreshold, hybridThreshold, lexiconVersion).
    """

    dominance_threshold: float = DEFAULT_DOMINANCE_THRESHOLD
    hybrid_threshold: float = DEFAULT_HYBRID_THRESHOLD
    lexicon_version: str = DEFAULT_LEXICON_VERSION

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "ClassifierConfig":
        """Build from a dict. Missing keys use defaults, bad types are coerced safely.

        Args:
            d: Settings dict ("classifier" section)

        Returns:
            ClassifierConfig instance (not yet range-validated)
        """
        return cls(
            dominance_threshold=safe_float(
                _first_present(d, "dominance_threshold", "dominanceThreshold"),
                DEFAULT_DOMINANCE_THRESHOLD,
            ),
            hybrid_threshold=safe_float(
                _first_present(d, "hybrid_threshold", "hybridThreshold"),
                DEFAULT_HYBRID_THRESHOLD,
            ),
            lexicon_version=safe_str(
                _first_present(d, "lexicon_version", "lexiconVersion"),
                DEFAULT_LEXICON_VERSION,
            ),
        )

    def validate(self) -> "ClassifierConfig":
        """Check threshold ranges.

        Returns:
            self, so calls can be chained.

        Raises:
            ConfigError: If a threshold lies outside 0-100.
        """
        for name in ("dominance_threshold", "hybrid_threshold"):
            value = getattr(self, name)
            if not 0.0 <= value <= 100.0:
                raise ConfigError(
                    f"{name} must be between 0 and 100 (got {value})",
                    context={name: value},
                )
        return self

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the camelCase option names."""
        return {
            "dominanceThreshold": self.dominance_threshold,
            "hybridThreshold": self.hybrid_threshold,
            "lexiconVersion": self.lexicon_version,
        }
