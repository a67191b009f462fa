"""Tests for credit card service."""

from decimal import Decimal

from duofin.domain.credit_cards import CreditCardService
from duofin.domain.entities import CreditCard


def test_summarize_active_cards(sample_cards):
    summary = CreditCardService().summarize(sample_cards)

    assert summary.total_cards == 2
    assert summary.total_limit == Decimal("8000")
    assert summary.total_used == Decimal("5100")
    assert summary.total_available == Decimal("2900")
    assert summary.cards_near_limit == 1
    assert summary.average_usage == Decimal("63.75")


def test_summarize_no_cards():
    summary = CreditCardService().summarize([])

    assert summary.total_cards == 0
    assert summary.average_usage == Decimal("0")


def test_usage_percent_zero_limit():
    card = CreditCard(id="c", name="Zero", credit_limit=Decimal("0"), current_balance=Decimal("10"))

    assert CreditCardService().usage_percent(card) == Decimal("0")


def test_near_limit_threshold_is_inclusive():
    card = CreditCard(id="c", name="Edge", credit_limit=Decimal("1000"), current_balance=Decimal("800"))

    assert CreditCardService().summarize([card]).cards_near_limit == 1
