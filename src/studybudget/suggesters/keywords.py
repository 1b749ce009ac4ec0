"""Keyword-based expense categorization.

Descriptions are matched against a fixed keyword table by plain substring
search on the lower-cased text, so "grilled" still hits "grill". Each keyword
counts once however often it appears, the category with the most hits wins and
ties go to the category declared first in ``CATEGORY_KEYWORDS``.
"""

from studybudget.models import CategorySuggestion

from .base import Suggester

FALLBACK_CATEGORY = "Other"

# Declaration order is the tie-break order.
CATEGORY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Food": (
        "burger", "pizza", "restaurant", "cafe", "coffee", "lunch", "dinner", "breakfast",
        "grocery", "supermarket", "market", "food", "eat", "meal", "bakery", "fastfood", "grill",
    ),
    "Transport": (
        "taxi", "uber", "bus", "train", "gas", "parking", "fuel", "carpool", "metro",
        "jeepney", "tricycle", "drive", "transport", "travel", "ticket",
    ),
    "Entertainment": (
        "movie", "cinema", "game", "gaming", "concert", "show", "netflix", "spotify",
        "entertainment", "ticket", "event", "play", "fun", "party",
    ),
    "Supplies": (
        "pen", "paper", "notebook", "book", "supplies", "office", "stationery", "printing",
        "material", "equipment", "tool",
    ),
    "Healthcare": (
        "doctor", "hospital", "pharmacy", "medicine", "drug", "health", "clinic", "dental",
        "medical", "treatment",
    ),
    "Clothing": (
        "shirt", "pants", "dress", "shoes", "clothing", "apparel", "fashion", "mall",
        "boutique", "wear", "garment",
    ),
}

# One keyword hit gives a third of full confidence.
KEYWORDS_FOR_FULL_CONFIDENCE = 3


def count_keyword_matches(description: str) -> dict[str, int]:
    lowered = description.lower()
    return {
        category: sum(1 for keyword in keywords if keyword in lowered)
        for category, keywords in CATEGORY_KEYWORDS.items()
    }


def suggest_category(description: str) -> CategorySuggestion:
    scores = count_keyword_matches(description)

    best_category = FALLBACK_CATEGORY
    best_count = 0
    for category, count in scores.items():
        if count > best_count:
            best_category = category
            best_count = count

    if best_count == 0:
        return CategorySuggestion(
            category=FALLBACK_CATEGORY,
            confidence=0.0,
            reason="No matching keywords found",
        )

    return CategorySuggestion(
        category=best_category,
        confidence=min(best_count / KEYWORDS_FOR_FULL_CONFIDENCE * 100, 100.0),
        reason=f'Matched keywords in "{best_category}" category',
    )


class KeywordSuggester(Suggester):
    def suggest(self, description: str) -> CategorySuggestion | None:
        suggestion = suggest_category(description)
        if suggestion.confidence <= 0:
            return None
        return suggestion

    def learn(self, description: str, category: str) -> None:
        # The keyword table is fixed.
        pass
