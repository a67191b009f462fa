"""Category suggestion domain service."""

import logging
from typing import Callable, Iterable, Optional, Sequence

from duofin.config import DEFAULT_SETTINGS, EngineSettings
from duofin.domain.entities import Category, CategorySuggestion, Kind, MonetaryRecord
from duofin.domain.keywords import DEFAULT_KEYWORDS, KeywordTable

logger = logging.getLogger(__name__)

HistoryLookup = Callable[[str], Iterable[MonetaryRecord]]


def records_history(records: Sequence[MonetaryRecord]) -> HistoryLookup:
    """Build a history lookup over already-fetched records.

    The lookup returns records whose description contains the token,
    compared case-insensitively, in input order.
    """

    def lookup(token: str) -> list[MonetaryRecord]:
        needle = token.lower()
        return [
            record
            for record in records
            if record.description and needle in record.description.lower()
        ]

    return lookup


class CategorySuggestionService:
    """Service for ranking likely categories of a free-text description."""

    def __init__(
        self,
        keywords: KeywordTable = DEFAULT_KEYWORDS,
        settings: EngineSettings = DEFAULT_SETTINGS,
    ):
        """Initialize suggestion service.

        Args:
            keywords: Canonical category name to keyword table
            settings: Engine settings (confidence steps and caps, sample size,
                number of suggestions)
        """
        self.keywords = keywords
        self.settings = settings

    def find_category(
        self, canonical_name: str, categories: Sequence[Category]
    ) -> Optional[Category]:
        """First known category whose name contains the canonical name."""
        wanted = canonical_name.lower()
        for category in categories:
            if wanted in category.name.lower():
                return category
        return None

    def keyword_suggestions(
        self, description: str, categories: Sequence[Category]
    ) -> list[CategorySuggestion]:
        """Suggestions from keyword occurrences in the description."""
        description_lower = description.lower()
        suggestions: list[CategorySuggestion] = []
        seen: set[str] = set()

        for canonical_name, words in self.keywords.items():
            category = self.find_category(canonical_name, categories)
            if category is None or category.id in seen:
                continue

            matched = [word for word in words if word in description_lower]
            if not matched:
                continue

            confidence = min(
                round(len(matched) * self.settings.keyword_step, 2),
                self.settings.keyword_cap,
            )
            suggestions.append(
                CategorySuggestion(
                    category=category,
                    confidence=confidence,
                    reason=f"Matched keywords: {', '.join(matched)}",
                )
            )
            seen.add(category.id)

        return suggestions

    def history_suggestions(
        self,
        description: str,
        categories: Sequence[Category],
        history: HistoryLookup,
        exclude: Iterable[str] = (),
    ) -> list[CategorySuggestion]:
        """Suggestions from categories used by similar past records.

        Similar records share the first word of the description. At most
        ``settings.history_sample_size`` of them are tallied.
        """
        token = description.strip().split(" ")[0]
        if not token:
            return []

        frequency: dict[str, int] = {}
        sample = 0
        for record in history(token):
            if sample >= self.settings.history_sample_size:
                break
            sample += 1
            if record.category_id is not None:
                frequency[record.category_id] = frequency.get(record.category_id, 0) + 1

        category_index = {category.id: category for category in categories}
        excluded = set(exclude)
        suggestions = []
        for category_id, count in frequency.items():
            category = category_index.get(category_id)
            if category is None or category_id in excluded:
                continue
            suggestions.append(
                CategorySuggestion(
                    category=category,
                    confidence=min(
                        round(count * self.settings.history_step, 2),
                        self.settings.history_cap,
                    ),
                    reason=f"Used {count} time(s) in similar transactions",
                )
            )
        return suggestions

    def suggest(
        self,
        description: str,
        categories: Sequence[Category],
        history: Optional[HistoryLookup] = None,
    ) -> list[CategorySuggestion]:
        """Rank up to ``settings.max_suggestions`` categories for a description.

        Keyword matches come first in discovery order, then history matches.
        The final sort is by confidence only and is stable, so equal
        confidences keep that discovery order.

        A failing history lookup is logged and the keyword suggestions are
        returned on their own; this method does not raise for lookup errors.

        Args:
            description: Free-text description of a new record
            categories: Known categories to choose from
            history: Optional lookup returning past records for a token

        Returns:
            Suggestions sorted by descending confidence
        """
        if not description or not description.strip():
            return []

        suggestions = self.keyword_suggestions(description, categories)

        if history is not None:
            try:
                suggestions.extend(
                    self.history_suggestions(
                        description,
                        categories,
                        history,
                        exclude=[s.category_id for s in suggestions],
                    )
                )
            except Exception:
                logger.warning(
                    "History lookup failed for %r; using keyword suggestions only",
                    description,
                    exc_info=True,
                )

        ranked = sorted(suggestions, key=lambda s: s.confidence, reverse=True)
        return ranked[: self.settings.max_suggestions]

    def most_used_categories(
        self,
        records: Iterable[MonetaryRecord],
        categories: Sequence[Category],
        kind: Optional[Kind] = None,
        limit: int = 5,
    ) -> list[CategorySuggestion]:
        """Categories ranked by how often records use them."""
        category_index = {category.id: category for category in categories}
        counts: dict[str, int] = {}
        for record in records:
            if kind is not None and record.kind != kind:
                continue
            if record.category_id in category_index:
                counts[record.category_id] = counts.get(record.category_id, 0) + 1

        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)[:limit]
        return [
            CategorySuggestion(
                category=category_index[category_id],
                confidence=1.0,
                reason=f"Used {count} time(s)",
            )
            for category_id, count in ranked
        ]
