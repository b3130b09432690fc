"""
Validation logic for lexicon documents.

This module provides:
- Two-stage validation pipeline (validate dict → build rule)
- ValidationIssue and ValidationResult dataclasses
- Pattern compilation for term lists
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from .models import PatternRule

SIGNAL_CATEGORY = "signal"


# ---------------------------------------------------------------------------
# Validation Issues
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ValidationIssue:
    """A single validation issue (error or warning).

    Attributes:
        location: Where the issue occurred (e.g., "strategic_architect.rules[2]").
        field: Field name where the issue occurred.
        message: Human-readable description of the issue.
        is_error: True for errors (lexicon rejected), False for warnings.
    """

    location: str
    field: str
    message: str
    is_error: bool


@dataclass
class ValidationResult:
    """Result of validation with issues and statistics.

    Attributes:
        issues: List of all validation issues (errors and warnings).
        categories_loaded: Number of categories that validated cleanly.
        rules_loaded: Number of rules that validated cleanly.
    """

    issues: list[ValidationIssue] = field(default_factory=list)
    categories_loaded: int = 0
    rules_loaded: int = 0

    @property
    def has_errors(self) -> bool:
        """Check if there are any errors."""
        return any(issue.is_error for issue in self.issues)

    @property
    def has_warnings(self) -> bool:
        """Check if there are any warnings."""
        return any(not issue.is_error for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count of error issues."""
        return sum(1 for issue in self.issues if issue.is_error)

    @property
    def warning_count(self) -> int:
        """Count of warning issues."""
        return sum(1 for issue in self.issues if not issue.is_error)

    def format_report(self) -> str:
        """Format a human-readable report of validation issues."""
        lines = []
        lines.append(f"Categories: {self.categories_loaded}, Rules: {self.rules_loaded}")
        lines.append(f"Errors: {self.error_count}, Warnings: {self.warning_count}")

        if self.issues:
            lines.append("")
            for issue in self.issues:
                level = "ERROR" if issue.is_error else "WARN"
                lines.append(f"[{level}] {issue.location}.{issue.field}: {issue.message}")

        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Identifiers and Pattern Compilation
# ---------------------------------------------------------------------------

_ID_PATTERN = re.compile(r"^[a-z][a-z0-9_]*$")


def is_valid_identifier(value: Any) -> bool:
    """Check a category/rule identifier (lowercase snake_case)."""
    return isinstance(value, str) and bool(_ID_PATTERN.match(value))


def compile_terms(terms: list[str] | tuple[str, ...]) -> str:
    """Build a word-boundary alternation from a list of terms.

    Terms keep their declared order (first alternative wins at a position).
    Internal whitespace in a phrase matches any run of whitespace.

    compile_terms(["make sure", "verify"]) matches "Make  sure" and "verify",
    but not "verified".
    """
    alternatives = [r"\s+".join(re.escape(word) for word in term.split()) for term in terms]
    return r"\b(?:" + "|".join(alternatives) + r")\b"


# ---------------------------------------------------------------------------
# Stage 1: Dict Validation
# ---------------------------------------------------------------------------


def _issue(location: str, field_name: str, message: str, is_error: bool = True) -> ValidationIssue:
    return ValidationIssue(location=location, field=field_name, message=message, is_error=is_error)


def validate_rule_dict(data: Any, location: str, require_weight: bool = True) -> list[ValidationIssue]:
    """Stage 1: Validate a raw rule dict from YAML.

    Checks:
    - Rule is a dict
    - name exists and is snake_case
    - weight is a positive number (optional for signal rules)
    - exactly one of terms/regex is present
    - terms is a non-empty list of non-empty strings
    - regex compiles

    Args:
        data: Raw rule data from YAML.
        location: Human-readable location for issue messages.
        require_weight: False for engagement signals, which default to 1.0.

    Returns:
        List of ValidationIssue objects (errors and warnings).
    """
    issues: list[ValidationIssue] = []

    if not isinstance(data, dict):
        issues.append(_issue(location, "(rule)", f"Rule must be a dict, got {type(data).__name__}"))
        return issues

    name = data.get("name")
    if name is None:
        issues.append(_issue(location, "name", "Required field is missing"))
    elif not is_valid_identifier(name):
        issues.append(_issue(location, "name", f"Name must be lowercase snake_case (got {name!r})"))

    weight = data.get("weight")
    if weight is None:
        if require_weight:
            issues.append(_issue(location, "weight", "Required field is missing"))
    elif isinstance(weight, bool) or not isinstance(weight, (int, float)):
        issues.append(_issue(location, "weight", f"Expected number, got {type(weight).__name__}"))
    elif weight <= 0:
        issues.append(_issue(location, "weight", f"Weight must be positive (got {weight})"))

    has_terms = "terms" in data
    has_regex = "regex" in data
    if has_terms and has_regex:
        issues.append(_issue(location, "terms", "Rule must declare either 'terms' or 'regex', not both"))
    elif not has_terms and not has_regex:
        issues.append(_issue(location, "terms", "Rule must declare 'terms' or 'regex'"))
    elif has_terms:
        terms = data.get("terms")
        if not isinstance(terms, list):
            issues.append(_issue(location, "terms", f"Expected list, got {type(terms).__name__}"))
        elif len(terms) == 0:
            issues.append(_issue(location, "terms", "Required field is missing or empty"))
        elif not all(isinstance(t, str) and t.strip() for t in terms):
            issues.append(_issue(location, "terms", "All terms must be non-empty strings"))
    else:
        regex = data.get("regex")
        if not isinstance(regex, str) or not regex.strip():
            issues.append(_issue(location, "regex", "Regex must be a non-empty string"))
        else:
            try:
                re.compile(regex, re.IGNORECASE)
            except re.error as e:
                issues.append(_issue(location, "regex", f"Invalid regex: {e}"))

    return issues


def validate_category_dict(data: Any, location: str) -> list[ValidationIssue]:
    """Stage 1: Validate a raw category dict (not its rules).

    Args:
        data: Raw category data from YAML.
        location: Human-readable location for issue messages.

    Returns:
        List of ValidationIssue objects.
    """
    issues: list[ValidationIssue] = []

    if not isinstance(data, dict):
        issues.append(_issue(location, "(category)", f"Category must be a dict, got {type(data).__name__}"))
        return issues

    category_id = data.get("id")
    if category_id is None:
        issues.append(_issue(location, "id", "Required field is missing"))
    elif not is_valid_identifier(category_id):
        issues.append(_issue(location, "id", f"ID must be lowercase snake_case (got {category_id!r})"))

    label = data.get("label")
    if label is not None and not isinstance(label, str):
        issues.append(_issue(location, "label", f"Expected str, got {type(label).__name__}"))
    elif not label:
        issues.append(_issue(location, "label", "Recommended field is empty", is_error=False))

    rules = data.get("rules")
    if rules is None or (isinstance(rules, list) and len(rules) == 0):
        issues.append(_issue(location, "rules", "Category must have at least one rule"))
    elif not isinstance(rules, list):
        issues.append(_issue(location, "rules", f"Expected list, got {type(rules).__name__}"))

    return issues


# ---------------------------------------------------------------------------
# Stage 2: Build Rule from Dict
# ---------------------------------------------------------------------------


def build_rule_from_dict(data: dict[str, Any], category: str) -> PatternRule:
    """Stage 2: Build an immutable PatternRule from a validated dict.

    Precondition: validate_rule_dict() returned no errors.

    Args:
        data: Validated rule dict from YAML.
        category: Owning category id (or SIGNAL_CATEGORY).

    Returns:
        Immutable PatternRule instance with its pattern compiled.
    """
    if "regex" in data:
        terms: tuple[str, ...] = ()
        pattern = data["regex"]
        is_regex = True
    else:
        terms = tuple(t.strip() for t in data["terms"])
        pattern = compile_terms(terms)
        is_regex = False

    return PatternRule(
        category=category,
        name=data["name"],
        pattern=pattern,
        weight=float(data.get("weight", 1.0)),
        terms=terms,
        is_regex=is_regex,
        compiled=re.compile(pattern, re.IGNORECASE),
    )
