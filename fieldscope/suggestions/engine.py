# FieldScope - Field Suggestion Engine
# ====================================
"""
Ranks field names for a partial or misspelled query.

Scoring per candidate field:
    0.5 * similarity
  + 0.2 * frequency weight
  + 0.2 * availability
  + 1.0 if the query is a known typo of (or exactly names) the field
  + contextual boost: 0.3 for a prefix match, 0.1 for a high-priority
    field, capped at 0.4

Tables are read-only, so one engine can serve concurrent callers.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional

from .data import SUGGESTION_DATA, EntitySuggestionData
from .similarity import similarity

logger = logging.getLogger(__name__)

SIMILARITY_WEIGHT = 0.5
FREQUENCY_WEIGHT = 0.2
AVAILABILITY_WEIGHT = 0.2
TYPO_BOOST = 1.0
PREFIX_BOOST = 0.3
PRIORITY_BOOST = 0.1
MAX_CONTEXTUAL_BOOST = 0.4

# Fields users ask for most, across entity types
HIGH_PRIORITY_FIELDS = frozenset({
    "summary", "status", "assignee", "description", "project",
    "issuetype", "key", "name", "displayName", "emailAddress",
})


@dataclass
class SuggestionOptions:
    """Tuning knobs for one suggestion call."""
    max_suggestions: int = 10
    min_similarity: float = 0.3
    use_contextual_boost: bool = True
    max_query_length: int = 256


@dataclass
class SuggestionResult:
    """One ranked suggestion with its score breakdown."""
    field: str
    score: float
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (wire form)."""
        return {
            "field": self.field,
            "score": round(self.score, 4),
            "metadata": {
                "similarity": round(self.metadata.get("similarity", 0.0), 4),
                "frequency": self.metadata.get("frequency"),
                "availability": self.metadata.get("availability"),
                "isTypoCorrection": self.metadata.get("is_typo_correction", False),
                "contextualBoost": round(self.metadata.get("contextual_boost", 0.0), 4),
            },
        }


class SuggestionEngine:
    """
    Typo-aware field name suggestions.

    Example:
        engine = SuggestionEngine()
        engine.suggest("issue", "stat", 3)      # ['status', ...]
        engine.suggest("issue", "assigne", 3)   # ['assignee', ...]
    """

    def __init__(self,
                 data: Optional[Mapping[str, EntitySuggestionData]] = None,
                 options: Optional[SuggestionOptions] = None):
        """
        Args:
            data: Suggestion tables keyed by entity type (defaults to the built-in tables)
            options: Default options for calls that don't pass their own
        """
        self._data = data if data is not None else SUGGESTION_DATA
        self.options = options or SuggestionOptions()

    @property
    def entity_types(self) -> List[str]:
        return sorted(self._data)

    def calculate_similarity(self, a: Any, b: Any) -> float:
        return similarity(a, b)

    def suggest(self, entity_type: str, query: Any, max_results: int = 10) -> List[str]:
        """
        Suggest field names for a query.

        Returns:
            Up to max_results field names, best first; [] for unknown entity types
        """
        options = replace(self.options, max_suggestions=max_results)
        return [result.field for result in self.suggest_with_metadata(entity_type, query, options)]

    def suggest_with_metadata(self,
                              entity_type: str,
                              query: Any,
                              options: Optional[SuggestionOptions] = None) -> List[SuggestionResult]:
        """
        Suggest fields with score breakdowns.

        An empty query lists the most available fields instead of ranking
        by similarity.
        """
        options = options or self.options
        if options.max_suggestions <= 0:
            return []

        data = self._data.get(entity_type)
        if data is None:
            logger.debug(f"No suggestion data for entity type: {entity_type}")
            return []

        normalized = self._normalize(query, options.max_query_length)
        if not normalized:
            return self._most_available(data, options.max_suggestions)

        typo_target = data.typo_corrections.get(normalized)
        results = []

        for name in data.known_fields:
            name_lower = name.lower()
            usage = data.usage(name)
            is_typo = typo_target == name or normalized == name_lower

            if is_typo:
                # Exact hits skip the distance computation
                score_similarity = 1.0 if normalized == name_lower else similarity(normalized, name_lower)
            else:
                score_similarity = similarity(normalized, name_lower)

            is_prefix = name_lower.startswith(normalized)
            if not (is_typo or is_prefix or score_similarity >= options.min_similarity):
                continue

            boost = 0.0
            if options.use_contextual_boost:
                if is_typo:
                    boost = MAX_CONTEXTUAL_BOOST
                else:
                    if is_prefix:
                        boost += PREFIX_BOOST
                    if self._is_high_priority(data, name):
                        boost += PRIORITY_BOOST
                    boost = min(boost, MAX_CONTEXTUAL_BOOST)

            score = (
                SIMILARITY_WEIGHT * score_similarity
                + FREQUENCY_WEIGHT * usage.frequency.weight
                + AVAILABILITY_WEIGHT * usage.availability
                + (TYPO_BOOST if is_typo else 0.0)
                + boost
            )

            results.append(SuggestionResult(
                field=name,
                score=score,
                metadata={
                    "similarity": score_similarity,
                    "frequency": usage.frequency.value,
                    "availability": usage.availability,
                    "is_typo_correction": is_typo,
                    "contextual_boost": boost,
                },
            ))

        results.sort(key=lambda r: (-r.score, -r.metadata["availability"], r.field))
        logger.debug(
            f"Suggestions for {entity_type}/{normalized!r}: "
            f"{[r.field for r in results[:options.max_suggestions]]}"
        )
        return results[:options.max_suggestions]

    @staticmethod
    def _normalize(query: Any, max_length: int) -> str:
        if query is None:
            return ""
        text = query if isinstance(query, str) else str(query)
        return text.strip().lower()[:max(max_length, 0)]

    @staticmethod
    def _is_high_priority(data: EntitySuggestionData, name: str) -> bool:
        return name in HIGH_PRIORITY_FIELDS or name in data.contextual_suggestions

    @staticmethod
    def _most_available(data: EntitySuggestionData, limit: int) -> List[SuggestionResult]:
        """Fields ordered by availability desc, then name."""
        results = []
        for name in data.known_fields:
            usage = data.usage(name)
            results.append(SuggestionResult(
                field=name,
                score=FREQUENCY_WEIGHT * usage.frequency.weight + AVAILABILITY_WEIGHT * usage.availability,
                metadata={
                    "similarity": 0.0,
                    "frequency": usage.frequency.value,
                    "availability": usage.availability,
                    "is_typo_correction": False,
                    "contextual_boost": 0.0,
                },
            ))
        results.sort(key=lambda r: (-r.metadata["availability"], r.field))
        return results[:limit]
