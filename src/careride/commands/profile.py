"""Command group: the signed-in doctor's own listing."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from careride.commands._base import CareGroup
from careride.services.profile import ProfileService

if TYPE_CHECKING:
    from careride.commands._context import AppContext

_PROFILE_EXAMPLES = """\
  careride profile show
  careride profile availability
  careride profile accepting
  careride profile languages English Spanish
  careride profile edit --location "Oakland, CA"
  careride --doctor doc_002 profile show"""


@click.group(cls=CareGroup, examples=_PROFILE_EXAMPLES)
@click.pass_obj
def profile(app: AppContext) -> None:
    """Edit your doctor listing (availability, languages, bio)."""


@profile.command(
    examples="""\
  careride profile show
  careride --json profile show"""
)
@click.pass_obj
def show(app: AppContext) -> None:
    """Show your listing as patients see it."""
    app.emit(app.service(ProfileService).profile())


@profile.command(
    examples="""\
  careride profile availability"""
)
@click.pass_obj
def availability(app: AppContext) -> None:
    """Toggle whether you show as available today."""
    app.emit(app.service(ProfileService).toggle_availability())


@profile.command(
    examples="""\
  careride profile accepting"""
)
@click.pass_obj
def accepting(app: AppContext) -> None:
    """Toggle whether you accept new patients."""
    app.emit(app.service(ProfileService).toggle_accepting())


@profile.command(
    examples="""\
  careride profile languages English
  careride profile languages English Mandarin Cantonese"""
)
@click.argument("language", nargs=-1, required=True)
@click.pass_obj
def languages(app: AppContext, language: tuple[str, ...]) -> None:
    """Replace the languages you speak with LANGUAGE..."""
    app.emit(app.service(ProfileService).set_languages(language))


@profile.command(
    examples="""\
  careride profile edit --bio "Cardiologist focused on prevention."
  careride profile edit --location "Oakland, CA"
  careride --json profile edit --location Berkeley"""
)
@click.option("--bio", default=None, help="New bio; an empty string clears it.")
@click.option("--location", default=None, help="New practice location.")
@click.pass_obj
def edit(app: AppContext, bio: str | None, location: str | None) -> None:
    """Change your bio and/or location."""
    app.emit(app.service(ProfileService).update(bio=bio, location=location))
