"""Category suggestion commands."""

import click

from duofin.domain.suggestions import CategorySuggestionService, records_history


@click.command("suggest")
@click.argument("description")
@click.option("--no-history", is_flag=True, help="Only use keyword matching")
@click.pass_context
def suggest(ctx, description: str, no_history: bool):
    """Suggest categories for a transaction description."""
    snapshot = ctx.obj["snapshot"]
    service = CategorySuggestionService(ctx.obj["keywords"], ctx.obj["settings"])

    history = None if no_history else records_history(snapshot.records)
    suggestions = service.suggest(description, snapshot.categories, history=history)

    if not suggestions:
        click.echo("No suggestions found.")
        return

    for suggestion in suggestions:
        click.echo(
            f"{suggestion.category.name:<30} {suggestion.confidence:>5.2f}  {suggestion.reason}"
        )


def register_commands(cli):
    """Register suggestion commands with main CLI."""
    cli.add_command(suggest)
