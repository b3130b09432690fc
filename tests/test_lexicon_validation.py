"""
Tests for stylecoach.common.lexicon.validation module.

Covers the two validation stages and term compilation.
"""

import re

import pytest

from stylecoach.common.lexicon.validation import (
    SIGNAL_CATEGORY,
    ValidationIssue,
    ValidationResult,
    build_rule_from_dict,
    compile_terms,
    is_valid_identifier,
    validate_category_dict,
    validate_rule_dict,
)


def _errors(issues):
    return [i for i in issues if i.is_error]


class TestCompileTerms:
    """Word-boundary alternation built from terms."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("please verify this", 1),
            ("it was verified", 0),
            ("Make  sure it works", 1),
            ("VERIFY and verify", 2),
        ],
    )
    def test_matches(self, text, expected):
        pattern = re.compile(compile_terms(["make sure", "verify"]), re.IGNORECASE)
        assert len(pattern.findall(text)) == expected

    def test_special_characters_escaped(self):
        pattern = re.compile(compile_terms(["c.d"]))
        assert pattern.search("a c.d b")
        assert not pattern.search("a cxd b")


class TestIdentifiers:
    @pytest.mark.parametrize("value", ["strategic_architect", "a", "v2_rules"])
    def test_valid(self, value):
        assert is_valid_identifier(value)

    @pytest.mark.parametrize("value", ["Strategic", "2fast", "with-dash", "", None, 3])
    def test_invalid(self, value):
        assert not is_valid_identifier(value)


class TestValidateRuleDict:
    """Stage 1 rule validation."""

    def test_valid_terms_rule(self):
        assert validate_rule_dict({"name": "r", "weight": 1.5, "terms": ["x"]}, "loc") == []

    def test_valid_regex_rule(self):
        assert validate_rule_dict({"name": "r", "weight": 1, "regex": r"\bx\b"}, "loc") == []

    def test_not_a_dict(self):
        issues = validate_rule_dict(["name"], "loc")
        assert len(_errors(issues)) == 1

    def test_missing_name(self):
        issues = validate_rule_dict({"weight": 1.0, "terms": ["x"]}, "loc")
        assert [i.field for i in _errors(issues)] == ["name"]

    @pytest.mark.parametrize("weight", [0, -1, "heavy", True])
    def test_bad_weight(self, weight):
        issues = validate_rule_dict({"name": "r", "weight": weight, "terms": ["x"]}, "loc")
        assert [i.field for i in _errors(issues)] == ["weight"]

    def test_weight_optional_for_signals(self):
        assert validate_rule_dict({"name": "r", "terms": ["x"]}, "loc", require_weight=False) == []

    def test_weight_required_for_categories(self):
        issues = validate_rule_dict({"name": "r", "terms": ["x"]}, "loc")
        assert [i.field for i in _errors(issues)] == ["weight"]

    def test_neither_terms_nor_regex(self):
        issues = validate_rule_dict({"name": "r", "weight": 1.0}, "loc")
        assert len(_errors(issues)) == 1

    def test_empty_terms(self):
        issues = validate_rule_dict({"name": "r", "weight": 1.0, "terms": []}, "loc")
        assert [i.field for i in _errors(issues)] == ["terms"]

    def test_blank_term(self):
        issues = validate_rule_dict({"name": "r", "weight": 1.0, "terms": ["ok", "  "]}, "loc")
        assert [i.field for i in _errors(issues)] == ["terms"]

    def test_invalid_regex(self):
        issues = validate_rule_dict({"name": "r", "weight": 1.0, "regex": "[a-"}, "loc")
        assert [i.field for i in _errors(issues)] == ["regex"]


class TestValidateCategoryDict:
    def test_valid(self):
        data = {"id": "planner", "label": "Planner", "rules": [{}]}
        assert validate_category_dict(data, "loc") == []

    def test_missing_rules(self):
        issues = validate_category_dict({"id": "planner", "label": "Planner"}, "loc")
        assert [i.field for i in _errors(issues)] == ["rules"]

    def test_bad_id(self):
        issues = validate_category_dict({"id": "Planner", "label": "Planner", "rules": [{}]}, "loc")
        assert [i.field for i in _errors(issues)] == ["id"]

    def test_missing_label_warns(self):
        issues = validate_category_dict({"id": "planner", "rules": [{}]}, "loc")
        assert _errors(issues) == []
        assert [i.field for i in issues] == ["label"]


class TestBuildRule:
    """Stage 2 rule construction."""

    def test_terms_rule(self):
        rule = build_rule_from_dict({"name": "r", "weight": 2, "terms": [" plan ", "road map"]}, "planner")
        assert rule.category == "planner"
        assert rule.weight == 2.0
        assert rule.terms == ("plan", "road map")
        assert not rule.is_regex
        assert rule.count_matches("Plan the ROAD   MAP, then plan again") == 3

    def test_regex_rule(self):
        rule = build_rule_from_dict({"name": "r", "weight": 1.0, "regex": r"TICKET-\d+"}, "planner")
        assert rule.is_regex
        assert rule.terms == ()
        assert rule.count_matches("ticket-1 and TICKET-22") == 2

    def test_signal_default_weight(self):
        rule = build_rule_from_dict({"name": "s", "terms": ["why"]}, SIGNAL_CATEGORY)
        assert rule.weight == 1.0


class TestValidationResult:
    def test_counts_and_report(self):
        result = ValidationResult(
            issues=[
                ValidationIssue("categories[0]", "rules", "Category must have at least one rule", True),
                ValidationIssue("categories[1]", "label", "Recommended field is empty", False),
            ],
            categories_loaded=1,
            rules_loaded=4,
        )
        assert result.has_errors and result.has_warnings
        assert (result.error_count, result.warning_count) == (1, 1)
        report = result.format_report()
        assert "Categories: 1, Rules: 4" in report
        assert "[ERROR] categories[0].rules" in report
        assert "[WARN] categories[1].label" in report
