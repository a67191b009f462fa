"""Domain layer for duofin application.

Services are imported lazily so that entities and errors can be used by the
utility modules without pulling in every aggregation service.
"""

_SERVICES = {
    "MonthlySummaryService": "duofin.domain.bucketing",
    "ProjectionService": "duofin.domain.projection",
    "BudgetAdherenceService": "duofin.domain.budget",
    "BillsService": "duofin.domain.bills",
    "CreditCardService": "duofin.domain.credit_cards",
    "CategorySuggestionService": "duofin.domain.suggestions",
    "ReportExporter": "duofin.domain.export",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
