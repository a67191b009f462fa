"""Credit card commands."""

import click

from duofin.domain.credit_cards import CreditCardService


@click.command("cards")
@click.pass_context
def cards(ctx):
    """Show credit card utilisation."""
    service = CreditCardService(ctx.obj["settings"])
    active = [card for card in ctx.obj["snapshot"].credit_cards if card.is_active]

    if not active:
        click.echo("No active credit cards found.")
        return

    click.echo("\nCredit Cards:")
    click.echo("-" * 80)
    click.echo(f"{'Card':<35} {'Limit':>15} {'Used':>15} {'Usage':>12}")
    click.echo("-" * 80)
    for card in active:
        click.echo(
            f"{card.name:<35} {card.credit_limit:>15,.2f} {card.current_balance:>15,.2f} "
            f"{service.usage_percent(card):>11.1f}%"
        )

    summary = service.summarize(active)
    click.echo("-" * 80)
    click.echo(
        f"{'Total':<35} {summary.total_limit:>15,.2f} {summary.total_used:>15,.2f} "
        f"{summary.average_usage:>11.1f}%"
    )
    click.echo(f"Available: {summary.total_available:,.2f}")
    if summary.cards_near_limit:
        click.echo(f"Cards near limit: {summary.cards_near_limit}")


def register_commands(cli):
    """Register credit card commands with main CLI."""
    cli.add_command(cards)
