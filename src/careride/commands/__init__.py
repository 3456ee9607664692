"""Subcommand groups for careride."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the command groups on the root CLI group."""
    from careride.commands.boost import boost
    from careride.commands.doctors import doctors
    from careride.commands.messages import messages
    from careride.commands.profile import profile
    from careride.commands.subscription import subscription

    cli.add_command(doctors)
    cli.add_command(subscription)
    cli.add_command(boost)
    cli.add_command(messages)
    cli.add_command(profile)
