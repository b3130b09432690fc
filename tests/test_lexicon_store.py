"""
Tests for stylecoach.common.lexicon.store module.

Verifies:
- LexiconStore loading and validation
- Error handling for invalid YAML and invalid rules
- Immutability of the loaded Lexicon
- load_lexicon() registry caching and directory override
"""

from pathlib import Path

import pytest

from stylecoach.common.errors import LexiconConfigError
from stylecoach.common.lexicon import (
    DEFAULT_LEXICON_VERSION,
    LEXICON_DIR_ENV,
    Lexicon,
    LexiconStore,
    StyleCategoryDefinition,
    clear_lexicon_cache,
    get_lexicon_dir,
    load_lexicon,
)
from stylecoach.common.lexicon.validation import build_rule_from_dict
from stylecoach.core.analysis.models import StyleCategory
from tests.conftest import LEXICON_FIXTURES_DIR


@pytest.fixture
def minimal_lexicon_path() -> Path:
    """Path to minimal valid lexicon fixture."""
    return LEXICON_FIXTURES_DIR / "minimal_valid.yaml"


@pytest.fixture
def isolated_registry():
    """Clear the process-wide registry before and after a test."""
    clear_lexicon_cache()
    yield
    clear_lexicon_cache()


def _load(name: str) -> LexiconStore:
    store = LexiconStore(LEXICON_FIXTURES_DIR / name)
    store.load()
    return store


# ---------------------------------------------------------------------------
# Basic Loading Tests
# ---------------------------------------------------------------------------


class TestLexiconStoreLoading:
    """Tests for LexiconStore loading functionality."""

    def test_load_minimal_lexicon(self, minimal_lexicon_path):
        """Load minimal valid lexicon."""
        store = LexiconStore(minimal_lexicon_path)
        result = store.load()
        assert store.is_loaded
        assert result.categories_loaded == 2
        assert result.rules_loaded == 3
        assert not result.has_errors

    def test_not_loaded_before_load(self, minimal_lexicon_path):
        """Store is not loaded before load() is called."""
        store = LexiconStore(minimal_lexicon_path)
        assert not store.is_loaded

    def test_not_loaded_raises_error(self, minimal_lexicon_path):
        """Accessing the lexicon before load() raises LexiconConfigError."""
        store = LexiconStore(minimal_lexicon_path)
        with pytest.raises(LexiconConfigError):
            _ = store.lexicon

    def test_category_order_preserved(self, minimal_lexicon):
        """Categories keep declaration order."""
        assert minimal_lexicon.categories == ("planner", "builder")

    def test_rules_and_labels(self, minimal_lexicon):
        """Rules carry weights, labels come from the file."""
        rules = minimal_lexicon.rules_for("builder")
        assert [r.name for r in rules] == ["building"]
        assert rules[0].weight == 2.0
        assert minimal_lexicon.label_for("planner") == "Planner"
        assert minimal_lexicon.rule_count == 3

    def test_signals_loaded(self, minimal_lexicon):
        """Signal rules default to weight 1.0."""
        assert [s.name for s in minimal_lexicon.signals] == ["question_asking", "learning"]
        assert all(s.weight == 1.0 for s in minimal_lexicon.signals)

    def test_unknown_category_raises_key_error(self, minimal_lexicon):
        with pytest.raises(KeyError):
            minimal_lexicon.rules_for("nonexistent")

    def test_version_mismatch_rejected(self, minimal_lexicon_path):
        """expected_version must match the file's version."""
        store = LexiconStore(minimal_lexicon_path, expected_version="v9")
        with pytest.raises(LexiconConfigError) as exc_info:
            store.load()
        assert "v9" in str(exc_info.value)


# ---------------------------------------------------------------------------
# Error Handling Tests
# ---------------------------------------------------------------------------


class TestLexiconStoreErrors:
    """Invalid lexicon files are rejected as a whole."""

    def test_yaml_syntax_error_has_line_number(self):
        """YAML syntax error includes line number."""
        with pytest.raises(LexiconConfigError) as exc_info:
            _load("invalid_yaml_syntax.yaml")
        assert exc_info.value.line is not None
        assert exc_info.value.line > 0

    def test_missing_categories_key_no_line_number(self):
        """Missing 'categories' key has no line number (schema error)."""
        with pytest.raises(LexiconConfigError) as exc_info:
            _load("missing_categories.yaml")
        assert exc_info.value.line is None
        assert "categories" in str(exc_info.value).lower()

    def test_empty_file(self):
        with pytest.raises(LexiconConfigError, match="empty"):
            _load("empty.yaml")

    def test_missing_file(self, tmp_path):
        with pytest.raises(LexiconConfigError, match="not found"):
            LexiconStore(tmp_path / "nope.yaml").load()

    def test_zero_rules_rejected(self):
        """A category with zero rules fails validation."""
        with pytest.raises(LexiconConfigError) as exc_info:
            _load("zero_rules.yaml")
        assert "at least one rule" in exc_info.value.report

    def test_nonpositive_weight_rejected(self):
        """A rule with weight <= 0 fails validation."""
        with pytest.raises(LexiconConfigError) as exc_info:
            _load("nonpositive_weight.yaml")
        assert "positive" in exc_info.value.report

    def test_bad_regex_rejected(self):
        with pytest.raises(LexiconConfigError) as exc_info:
            _load("bad_regex.yaml")
        assert "Invalid regex" in exc_info.value.report

    def test_terms_and_regex_rejected(self):
        with pytest.raises(LexiconConfigError) as exc_info:
            _load("terms_and_regex.yaml")
        assert "not both" in exc_info.value.report

    def test_duplicates_reported(self):
        """Duplicate rule names and category ids are both reported."""
        with pytest.raises(LexiconConfigError) as exc_info:
            _load("duplicate_ids.yaml")
        report = exc_info.value.report
        assert "Duplicate rule name" in report
        assert "Duplicate category ID" in report

    def test_error_string_includes_report(self):
        with pytest.raises(LexiconConfigError) as exc_info:
            _load("zero_rules.yaml")
        assert "[ERROR]" in str(exc_info.value)

    def test_missing_label_is_warning(self):
        """Missing label and description are warnings, not errors."""
        store = LexiconStore(LEXICON_FIXTURES_DIR / "missing_label.yaml")
        result = store.load()
        assert not result.has_errors
        assert result.warning_count == 2
        assert store.lexicon.label_for("planner") == "Planner"


# ---------------------------------------------------------------------------
# Immutability Tests
# ---------------------------------------------------------------------------


class TestLexiconImmutability:
    """The loaded Lexicon cannot be modified."""

    def test_lexicon_is_frozen(self, minimal_lexicon):
        with pytest.raises(AttributeError):
            minimal_lexicon.version = "other"  # type: ignore[misc]

    def test_rules_are_tuples(self, minimal_lexicon):
        assert isinstance(minimal_lexicon.category_definitions, tuple)
        assert isinstance(minimal_lexicon.rules_for("planner"), tuple)

    def test_index_is_read_only(self, minimal_lexicon):
        with pytest.raises(TypeError):
            minimal_lexicon._by_id["x"] = None  # type: ignore[index]

    def test_direct_construction_builds_index(self):
        rule = build_rule_from_dict({"name": "roadmap", "terms": ["plan"]}, "planner")
        lexicon = Lexicon(
            version="adhoc",
            description="",
            category_definitions=(StyleCategoryDefinition("planner", "Planner", (rule,)),),
        )
        assert lexicon.rules_for("planner") == (rule,)
        assert lexicon.label_for("planner") == "Planner"
        assert lexicon.label_for("builder") == "Builder"
        with pytest.raises(TypeError):
            lexicon._by_id["x"] = None  # type: ignore[index]


# ---------------------------------------------------------------------------
# Registry Tests
# ---------------------------------------------------------------------------


class TestLoadLexicon:
    """Tests for the process-wide load_lexicon() registry."""

    def test_default_version(self, isolated_registry):
        lexicon = load_lexicon()
        assert lexicon.version == DEFAULT_LEXICON_VERSION == "v2"

    def test_same_object_returned(self, isolated_registry):
        """Repeated loads return the identical cached object."""
        assert load_lexicon("v2") is load_lexicon("v2")

    def test_packaged_categories_in_priority_order(self, lexicon, lexicon_v1):
        expected = tuple(c.value for c in StyleCategory)
        assert lexicon.categories == expected
        assert lexicon_v1.categories == expected

    def test_v2_extends_v1(self, lexicon, lexicon_v1):
        v1_rules = {r.name for r in lexicon_v1.rules_for("strategic_architect")}
        v2_rules = {r.name for r in lexicon.rules_for("strategic_architect")}
        assert {"meta_analysis", "execution_led"} <= v2_rules - v1_rules

    def test_unknown_version(self, isolated_registry):
        with pytest.raises(LexiconConfigError, match="Unknown lexicon version") as exc_info:
            load_lexicon("v999")
        assert exc_info.value.user_message == "No lexicon file for version 'v999'"
        assert exc_info.value.context["path"].endswith("interaction_styles_v999.yaml")

    def test_directory_override(self, isolated_registry, monkeypatch, tmp_path):
        """STYLECOACH_LEXICON_DIR redirects version lookup."""
        source = (LEXICON_FIXTURES_DIR / "minimal_valid.yaml").read_text(encoding="utf-8")
        (tmp_path / "interaction_styles_test.yaml").write_text(source, encoding="utf-8")
        monkeypatch.setenv(LEXICON_DIR_ENV, str(tmp_path))

        assert get_lexicon_dir() == tmp_path.resolve()
        lexicon = load_lexicon("test")
        assert lexicon.categories == ("planner", "builder")
