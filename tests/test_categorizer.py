"""Tests for the keyword categorizer and the category catalog."""

import pytest

from src.core.catalog import DEFAULT_CATALOG, FALLBACK_KEY, CategoryCatalog
from src.core.categorizer import categorize, confidence_for_score, score_description
from src.models.schemas import CategoryDefinition, Confidence


class TestCatalog:
    def test_has_expected_categories_in_order(self):
        assert DEFAULT_CATALOG.keys() == [
            "food", "transport", "shopping", "health", "entertainment", "bills",
            "education", "travel", "fitness", "personal", "investments", "other",
        ]

    def test_fallback_has_no_keywords(self):
        assert DEFAULT_CATALOG.fallback.key == FALLBACK_KEY
        assert DEFAULT_CATALOG.fallback.keywords == ()

    def test_get_known_key(self):
        assert DEFAULT_CATALOG.get("food").label == "Food & Dining"

    def test_unknown_key_resolves_to_fallback(self):
        assert DEFAULT_CATALOG.get("groceries-2019").key == "other"
        assert DEFAULT_CATALOG.get(None).key == "other"

    def test_scoring_categories_exclude_fallback(self):
        keys = [c.key for c in DEFAULT_CATALOG.scoring_categories()]
        assert "other" not in keys
        assert len(keys) == len(DEFAULT_CATALOG) - 1

    def test_keywords_are_lowercase(self):
        for cat in DEFAULT_CATALOG:
            assert all(kw == kw.lower() for kw in cat.keywords)

    def test_definitions_are_immutable(self):
        with pytest.raises(Exception):
            DEFAULT_CATALOG.get("food").label = "Snacks"

    def test_rejects_missing_fallback(self):
        with pytest.raises(ValueError):
            CategoryCatalog([CategoryDefinition(key="food", label="Food")])

    def test_rejects_duplicate_keys(self):
        with pytest.raises(ValueError):
            CategoryCatalog([
                CategoryDefinition(key="other", label="Other"),
                CategoryDefinition(key="other", label="Misc"),
            ])


class TestScoring:
    def test_long_keyword_scores_three(self):
        assert score_description("netflix", ("netflix",)) == 3

    def test_short_keyword_scores_two(self):
        assert score_description("gym", ("gym",)) == 2

    def test_length_boundary(self):
        # exactly 5 characters is not "long"
        assert score_description("pizza", ("pizza",)) == 2
        assert score_description("coffee", ("coffee",)) == 3

    def test_repeated_occurrence_counted_once(self):
        assert score_description("pizza pizza pizza", ("pizza",)) == 2

    def test_duplicate_keyword_in_list_counted_per_listing(self):
        assert score_description("drink", ("drink", "drink")) == 4


class TestConfidence:
    @pytest.mark.parametrize("score,expected", [
        (0, Confidence.LOW),
        (1, Confidence.LOW),
        (2, Confidence.MEDIUM),
        (5, Confidence.MEDIUM),
        (6, Confidence.HIGH),
        (12, Confidence.HIGH),
    ])
    def test_mapping(self, score, expected):
        assert confidence_for_score(score) == expected


class TestCategorize:
    def test_unrelated_text_falls_back(self):
        result = categorize("qwerty zzz")
        assert result.category == "other"
        assert result.score == 0
        assert result.confidence == Confidence.LOW

    def test_empty_description(self):
        result = categorize("")
        assert result.category == "other"
        assert result.score == 0

    def test_single_long_keyword(self):
        result = categorize("Netflix")
        assert result.category == "entertainment"
        assert result.score >= 3

    def test_case_insensitive(self):
        assert categorize("STARBUCKS").category == "food"

    def test_multiple_keywords_accumulate(self):
        # "lunch" (2) + "restaurant" (3)
        result = categorize("lunch restaurant")
        assert result.category == "food"
        assert result.score == 5
        assert result.confidence == Confidence.MEDIUM

    def test_high_confidence(self):
        result = categorize("Starbucks coffee breakfast")
        assert result.category == "food"
        assert result.score >= 6
        assert result.confidence == Confidence.HIGH

    def test_tie_keeps_first_in_catalog_order(self):
        # "ticket" is both a transport and an entertainment keyword
        result = categorize("ticket")
        assert result.category == "transport"
        assert result.score == 3

    def test_substring_matching(self):
        # "car" matches inside "carwash"
        assert categorize("carwash").category == "transport"

    def test_custom_catalog(self):
        catalog = CategoryCatalog([
            CategoryDefinition(key="pets", label="Pets", keywords=("kibble",)),
            CategoryDefinition(key="other", label="Other"),
        ])
        result = categorize("bag of kibble", catalog=catalog)
        assert result.category == "pets"
        assert result.score == 3

    def test_idempotent(self):
        assert categorize("Uber to airport") == categorize("Uber to airport")
