"""
Interaction Style Lexicon - versioned pattern registry.

This package provides loading and validation of the static, versioned
pattern lexicon that maps each style category to weighted pattern rules.

Public API:
    load_lexicon: Load a lexicon version once per process (cached).
    LexiconStore: Load and validate an arbitrary lexicon file.
    Lexicon: Immutable lexicon (ordered categories, rules, signals).
    PatternRule: Immutable weighted pattern rule.
    StyleCategoryDefinition: Immutable category with its rules.
    ValidationResult: Result of validation with issues and statistics.
    ValidationIssue: A single validation issue (error or warning).
    DEFAULT_LEXICON_VERSION: Version used when none is requested.

Example:
    from stylecoach.common.lexicon import load_lexicon

    lexicon = load_lexicon()
    for category in lexicon.categories:
        print(category, len(lexicon.rules_for(category)))
"""

from .models import Lexicon, PatternRule, StyleCategoryDefinition
from .store import (
    DEFAULT_LEXICON_VERSION,
    LEXICON_DIR_ENV,
    LexiconStore,
    clear_lexicon_cache,
    get_lexicon_dir,
    lexicon_path_for,
    load_lexicon,
)
from .validation import (
    SIGNAL_CATEGORY,
    ValidationIssue,
    ValidationResult,
    compile_terms,
)

__all__ = [
    # Main API
    "load_lexicon",
    "LexiconStore",
    "Lexicon",
    "PatternRule",
    "StyleCategoryDefinition",
    # Validation
    "ValidationResult",
    "ValidationIssue",
    "compile_terms",
    # Utilities
    "clear_lexicon_cache",
    "get_lexicon_dir",
    "lexicon_path_for",
    "DEFAULT_LEXICON_VERSION",
    "LEXICON_DIR_ENV",
    "SIGNAL_CATEGORY",
]
