"""Login and logout commands."""

import click


@click.command("login")
@click.option("--password", prompt=True, hide_input=True, help="Shared password")
@click.pass_context
def login(ctx, password: str) -> None:
    """Start a session.

    Sessions end after 30 minutes without a command.
    """
    session = ctx.obj["session"]
    if not session.password_required:
        click.echo("No password is configured; login is not required.")
        return
    if not session.login(password):
        click.echo("Error: Incorrect password.", err=True)
        ctx.exit(1)
    click.echo("Logged in.")


@click.command("logout")
@click.pass_context
def logout(ctx) -> None:
    """End the current session."""
    ctx.obj["session"].logout()
    click.echo("Logged out.")


def register_commands(cli: click.Group) -> None:
    """Register session commands with main CLI."""
    cli.add_command(login)
    cli.add_command(logout)
