# FieldScope Suggestions Module
# =============================
"""
Typo-aware field name suggestions.

Components:
- similarity: Levenshtein distance and normalized similarity (RapidFuzz)
- data: Static typo corrections and usage statistics per entity type
- engine: Scores and ranks candidate fields for a query
"""

from .similarity import levenshtein_distance, similarity

from .data import (
    FieldUsage,
    EntitySuggestionData,
    SUGGESTION_DATA,
)

from .engine import (
    SuggestionEngine,
    SuggestionOptions,
    SuggestionResult,
)


__all__ = [
    "levenshtein_distance",
    "similarity",
    "FieldUsage",
    "EntitySuggestionData",
    "SUGGESTION_DATA",
    "SuggestionEngine",
    "SuggestionOptions",
    "SuggestionResult",
]
