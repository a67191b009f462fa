"""Tests for report period resolution on the command line."""

from datetime import date

import click
import pytest

from duofin.cli.date_filters import PERIOD_OPTIONS, collect_period_flags, resolve_cli_date_range
from duofin.utils.date_parser import get_date_range

AS_OF = date(2024, 3, 10)
REPORT_WINDOW = get_date_range("last-6-months", today=AS_OF)


@pytest.fixture
def ctx():
    return click.Context(click.Command("report"))


def _resolve(ctx, start_date=None, end_date=None, default_range=REPORT_WINDOW, **periods):
    flags = {period: periods.get(period.replace("-", "_"), False) for period in PERIOD_OPTIONS}
    return resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=flags,
        default_range=default_range,
        today=AS_OF,
    )


def test_report_window_is_default(ctx):
    assert _resolve(ctx) == (date(2023, 10, 1), AS_OF)


def test_no_default_leaves_range_open(ctx):
    assert _resolve(ctx, default_range=None) == (None, None)


@pytest.mark.parametrize(
    "period,expected",
    [
        ("this_month", (date(2024, 3, 1), AS_OF)),
        ("last_month", (date(2024, 2, 1), date(2024, 2, 29))),
        ("last_3_months", (date(2024, 1, 1), AS_OF)),
        ("last_year", (date(2023, 1, 1), date(2023, 12, 31))),
    ],
)
def test_period_flag_overrides_report_window(ctx, period, expected):
    assert _resolve(ctx, **{period: True}) == expected


def test_explicit_dates_accept_relative_words(ctx):
    assert _resolve(ctx, start_date="last month", end_date="2024-02-15") == (
        date(2024, 2, 1),
        date(2024, 2, 15),
    )


def test_only_start_date_keeps_end_open(ctx):
    assert _resolve(ctx, start_date="2024-01-01") == (date(2024, 1, 1), None)


def test_two_periods_rejected(ctx, capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        _resolve(ctx, this_month=True, last_6_months=True)

    assert excinfo.value.exit_code == 1
    assert "Only one period option" in capsys.readouterr().err


def test_period_with_explicit_date_rejected(ctx, capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        _resolve(ctx, start_date="2024-01-01", last_month=True)

    assert excinfo.value.exit_code == 1
    assert "cannot be combined" in capsys.readouterr().err


def test_malformed_end_date_rejected(ctx, capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        _resolve(ctx, end_date="xyzzy")

    assert excinfo.value.exit_code == 1
    assert "Invalid end date" in capsys.readouterr().err


def test_inverted_range_rejected(ctx, capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        _resolve(ctx, start_date="2024-02-01", end_date="2024-01-01")

    assert excinfo.value.exit_code == 1
    assert "is after end date" in capsys.readouterr().err


def test_collect_period_flags_pops_click_kwargs():
    kwargs = {"this_month": True, "last_6_months": False, "owner": "ana"}

    flags = collect_period_flags(kwargs)

    assert flags["this-month"] is True
    assert flags["last-6-months"] is False
    assert set(flags) == set(PERIOD_OPTIONS)
    assert kwargs == {"owner": "ana"}
