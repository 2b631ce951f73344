"""Keyword-based auto-categorization for expense descriptions.

Scores every category by the keywords found in the description and picks
the best one. Pure function of its input and the catalog, cheap enough to
call on every keystroke.
"""

from src.core.catalog import DEFAULT_CATALOG, CategoryCatalog
from src.models.results import CategorySuggestion
from src.models.schemas import Confidence

LONG_KEYWORD_LENGTH = 5
LONG_KEYWORD_POINTS = 3
SHORT_KEYWORD_POINTS = 2


def confidence_for_score(score: int) -> Confidence:
    if score >= 6:
        return Confidence.HIGH
    if score >= 2:
        return Confidence.MEDIUM
    return Confidence.LOW


def score_description(text: str, keywords: tuple[str, ...]) -> int:
    """Sum keyword points for *text*. Each keyword counts at most once per listing."""
    score = 0
    for kw in keywords:
        if kw in text:
            score += LONG_KEYWORD_POINTS if len(kw) > LONG_KEYWORD_LENGTH else SHORT_KEYWORD_POINTS
    return score


def categorize(
    description: str,
    catalog: CategoryCatalog = DEFAULT_CATALOG,
) -> CategorySuggestion:
    """Suggest a category for a free-text expense description.

    Ties keep the first category in catalog order. When nothing scores,
    the catalog's fallback category is returned with score 0.
    """
    text = (description or "").lower()
    best_key = catalog.fallback.key
    best_score = 0

    for cat in catalog.scoring_categories():
        score = score_description(text, cat.keywords)
        if score > best_score:
            best_key, best_score = cat.key, score

    return CategorySuggestion(
        category=best_key,
        confidence=confidence_for_score(best_score),
        score=best_score,
    )
