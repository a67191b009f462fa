"""Credit card utilisation domain service."""

from decimal import Decimal
from typing import Iterable

from duofin.config import DEFAULT_SETTINGS, EngineSettings
from duofin.domain.entities import CreditCard, CreditCardSummary

ZERO = Decimal("0")
HUNDRED = Decimal("100")


class CreditCardService:
    """Service for summarising credit card limits and balances."""

    def __init__(self, settings: EngineSettings = DEFAULT_SETTINGS):
        self.settings = settings

    def usage_percent(self, card: CreditCard) -> Decimal:
        """Balance as a percentage of limit; 0 for a card without limit."""
        if card.credit_limit > 0:
            return card.current_balance / card.credit_limit * HUNDRED
        return ZERO

    def summarize(self, cards: Iterable[CreditCard]) -> CreditCardSummary:
        """Summarise active cards.

        Inactive cards are ignored. A card counts as near its limit when usage
        reaches ``settings.card_near_limit_percent``.
        """
        total_cards = near_limit = 0
        total_limit = total_used = ZERO

        for card in cards:
            if not card.is_active:
                continue
            total_cards += 1
            total_limit += card.credit_limit
            total_used += card.current_balance
            if self.usage_percent(card) >= self.settings.card_near_limit_percent:
                near_limit += 1

        return CreditCardSummary(
            total_cards=total_cards,
            total_limit=total_limit,
            total_used=total_used,
            total_available=total_limit - total_used,
            cards_near_limit=near_limit,
            average_usage=total_used / total_limit * HUNDRED if total_limit > 0 else ZERO,
        )
