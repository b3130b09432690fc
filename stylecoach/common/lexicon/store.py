"""
LexiconStore for loading interaction style lexicons.

This module provides:
- LexiconStore class: load and validate one lexicon YAML file
- Immutable Lexicon snapshots (tuples and MappingProxyType only)
- load_lexicon(): process-wide registry, one load per version
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Any, cast

import yaml

from stylecoach.common.errors import LexiconConfigError

from .models import Lexicon, PatternRule, StyleCategoryDefinition
from .validation import (
    SIGNAL_CATEGORY,
    ValidationIssue,
    ValidationResult,
    build_rule_from_dict,
    validate_category_dict,
    validate_rule_dict,
)

logger = logging.getLogger(__name__)

DEFAULT_LEXICON_VERSION = "v2"
LEXICON_DIR_ENV = "STYLECOACH_LEXICON_DIR"
LEXICON_FILENAME_TEMPLATE = "interaction_styles_{version}.yaml"


# ---------------------------------------------------------------------------
# LexiconStore
# ---------------------------------------------------------------------------


class LexiconStore:
    """Store for one interaction style lexicon file.

    The lexicon is validated in full before it is exposed; any error rejects
    the whole file. Once loaded, the Lexicon snapshot is immutable.

    Usage:
        store = LexiconStore(Path("interaction_styles_v2.yaml"))
        result = store.load()
        if result.has_warnings:
            print(result.format_report())
        lexicon = store.lexicon
    """

    def __init__(self, path: Path, expected_version: str | None = None) -> None:
        """Initialize the store with a path to the YAML file.

        Args:
            path: Path to the lexicon YAML file.
            expected_version: If set, the file's `version` must match.
        """
        self._path = Path(path)
        self._expected_version = expected_version
        self._lexicon: Lexicon | None = None

    def load(self) -> ValidationResult:
        """Load and validate the lexicon YAML file.

        Returns:
            ValidationResult with load statistics and any warnings.

        Raises:
            LexiconConfigError: If the YAML cannot be parsed or any
                validation error is found.
        """
        result = ValidationResult()
        raw_data = self._load_yaml()

        version = raw_data.get("version")
        if version is None or not str(version).strip():
            result.issues.append(ValidationIssue("(lexicon)", "version", "Required field is missing", True))
            version = ""
        version = str(version).strip()
        if self._expected_version is not None and version and version != self._expected_version:
            result.issues.append(
                ValidationIssue(
                    "(lexicon)",
                    "version",
                    f"File declares version '{version}', expected '{self._expected_version}'",
                    True,
                )
            )

        description = raw_data.get("description")
        if not description:
            result.issues.append(ValidationIssue("(lexicon)", "description", "Recommended field is empty", False))

        categories = self._load_categories(raw_data, result)
        signals = self._load_signals(raw_data, result)

        if result.has_errors:
            raise LexiconConfigError(
                f"Lexicon {self._path.name} failed validation with {result.error_count} error(s)",
                report=result.format_report(),
                context={"path": str(self._path)},
            )

        for issue in result.issues:
            logger.warning("Lexicon %s: %s.%s: %s", self._path.name, issue.location, issue.field, issue.message)

        self._lexicon = Lexicon(
            version=version,
            description=str(description or ""),
            category_definitions=tuple(categories),
            signals=tuple(signals),
        )
        logger.info(
            "Loaded lexicon %s (%d categories, %d rules)",
            version,
            result.categories_loaded,
            result.rules_loaded,
        )
        return result

    def _load_yaml(self) -> dict[str, Any]:
        """Load YAML with line number preservation for syntax errors."""
        try:
            with open(self._path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise LexiconConfigError(f"Lexicon file not found: {self._path}") from e
        except yaml.YAMLError as e:
            line = None
            column = None
            if hasattr(e, "problem_mark") and e.problem_mark is not None:
                line = e.problem_mark.line + 1  # 0-indexed -> 1-indexed
                column = e.problem_mark.column + 1
            raise LexiconConfigError(f"YAML syntax error: {e}", line=line, column=column) from e

        if data is None:
            raise LexiconConfigError(f"Lexicon file is empty: {self._path}")
        if not isinstance(data, dict):
            raise LexiconConfigError(f"Lexicon root must be a mapping, got {type(data).__name__}")
        if "categories" not in data:
            raise LexiconConfigError("Missing 'categories' key in YAML")
        if not isinstance(data["categories"], list):
            raise LexiconConfigError("'categories' must be a list")
        return cast(dict[str, Any], data)

    def _load_categories(self, raw_data: dict[str, Any], result: ValidationResult) -> list[StyleCategoryDefinition]:
        categories: list[StyleCategoryDefinition] = []
        seen_ids: set[str] = set()

        if not raw_data["categories"]:
            result.issues.append(ValidationIssue("(lexicon)", "categories", "At least one category is required", True))

        for i, category_data in enumerate(raw_data["categories"]):
            location = f"categories[{i}]"
            issues = validate_category_dict(category_data, location)
            result.issues.extend(issues)
            if any(issue.is_error for issue in issues):
                continue

            category_id = category_data["id"]
            if category_id in seen_ids:
                result.issues.append(ValidationIssue(location, "id", f"Duplicate category ID: '{category_id}'", True))
                continue
            seen_ids.add(category_id)

            rules = self._load_rules(category_data["rules"], category_id, category_id, result, require_weight=True)
            if rules is None:
                continue

            categories.append(
                StyleCategoryDefinition(
                    id=category_id,
                    label=category_data.get("label") or "",
                    rules=tuple(rules),
                )
            )
            result.categories_loaded += 1

        return categories

    def _load_signals(self, raw_data: dict[str, Any], result: ValidationResult) -> list[PatternRule]:
        signals_data = raw_data.get("signals")
        if signals_data is None:
            return []
        if not isinstance(signals_data, list):
            result.issues.append(ValidationIssue("(lexicon)", "signals", "'signals' must be a list", True))
            return []
        return self._load_rules(signals_data, SIGNAL_CATEGORY, "signals", result, require_weight=False) or []

    def _load_rules(
        self,
        rules_data: list[Any],
        category: str,
        prefix: str,
        result: ValidationResult,
        require_weight: bool,
    ) -> list[PatternRule] | None:
        """Validate and build a rule list. Returns None if any rule failed."""
        rules: list[PatternRule] = []
        seen_names: set[str] = set()
        failed = False

        for j, rule_data in enumerate(rules_data):
            location = f"{prefix}.rules[{j}]" if prefix != "signals" else f"signals[{j}]"
            issues = validate_rule_dict(rule_data, location, require_weight=require_weight)
            result.issues.extend(issues)
            if any(issue.is_error for issue in issues):
                failed = True
                continue

            name = rule_data["name"]
            if name in seen_names:
                result.issues.append(ValidationIssue(location, "name", f"Duplicate rule name: '{name}'", True))
                failed = True
                continue
            seen_names.add(name)

            rules.append(build_rule_from_dict(rule_data, category))
            if category != SIGNAL_CATEGORY:
                result.rules_loaded += 1

        return None if failed else rules

    @property
    def is_loaded(self) -> bool:
        """Check if the lexicon has been loaded."""
        return self._lexicon is not None

    @property
    def lexicon(self) -> Lexicon:
        """Get the loaded Lexicon.

        Raises:
            LexiconConfigError: If load() has not been called.
        """
        if self._lexicon is None:
            raise LexiconConfigError("Lexicon not loaded. Call load() first.")
        return self._lexicon


# ---------------------------------------------------------------------------
# Process-wide registry
# ---------------------------------------------------------------------------

_registry: dict[str, Lexicon] = {}
_registry_lock = threading.Lock()


def get_lexicon_dir() -> Path:
    """Get the directory lexicon files are resolved from.

    Resolution order:
    1. STYLECOACH_LEXICON_DIR environment variable (if set and non-empty)
    2. Packaged resources: stylecoach/resources/lexicon/
    """
    env_dir = os.environ.get(LEXICON_DIR_ENV, "").strip()
    if env_dir:
        return Path(env_dir).resolve()
    # stylecoach/common/lexicon/store.py -> stylecoach/resources/lexicon
    return Path(__file__).resolve().parent.parent.parent / "resources" / "lexicon"


def lexicon_path_for(version: str) -> Path:
    """Resolve the file path for a lexicon version."""
    return get_lexicon_dir() / LEXICON_FILENAME_TEMPLATE.format(version=version)


def load_lexicon(version: str | None = None) -> Lexicon:
    """Load a lexicon version once per process and return it.

    Repeated calls with the same version return the same immutable object.

    Args:
        version: Lexicon version (None for DEFAULT_LEXICON_VERSION).

    Returns:
        The immutable Lexicon.

    Raises:
        LexiconConfigError: If the version is unknown or its file is invalid.
    """
    version = (version or DEFAULT_LEXICON_VERSION).strip()
    cached = _registry.get(version)
    if cached is not None:
        return cached

    with _registry_lock:
        cached = _registry.get(version)
        if cached is not None:
            return cached

        path = lexicon_path_for(version)
        if not path.exists():
            raise LexiconConfigError(
                f"Unknown lexicon version '{version}'",
                user_message=f"No lexicon file for version '{version}'",
                context={"path": str(path)},
            )
        store = LexiconStore(path, expected_version=version)
        store.load()
        _registry[version] = store.lexicon
        logger.debug("Cached lexicon %s from %s", version, path)
        return store.lexicon


def clear_lexicon_cache() -> None:
    """Drop cached lexicons (tests and lexicon editing tools only)."""
    with _registry_lock:
        _registry.clear()
