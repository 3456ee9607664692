"""Command group: doctor search and profiles."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from careride.commands._base import CareGroup
from careride.domain.types import Specialty
from careride.services.search import SearchService

if TYPE_CHECKING:
    from careride.commands._context import AppContext

_DOCTORS_EXAMPLES = """\
  careride doctors search
  careride doctors search cardiology
  careride doctors search "san francisco" --limit 3
  careride doctors search --specialty dermatology
  careride doctors get doc_001
  careride doctors specialties"""


@click.group(cls=CareGroup, examples=_DOCTORS_EXAMPLES)
@click.pass_obj
def doctors(app: AppContext) -> None:
    """Find doctors. Sponsored listings are shown first."""


@doctors.command(
    examples="""\
  careride doctors search
  careride doctors search "heart"
  careride doctors search oakland --specialty dermatology
  careride -v doctors search cardio
  careride --json doctors search "Dr. Chen" --limit 1"""
)
@click.argument("query_text", required=False, default="")
@click.option(
    "--specialty",
    type=click.Choice([str(s) for s in Specialty], case_sensitive=False),
    default=None,
    help="Only doctors of this specialty.",
)
@click.option("--limit", type=click.IntRange(min=0), default=None, help="Max results.")
@click.pass_obj
def search(app: AppContext, query_text: str, specialty: str | None, limit: int | None) -> None:
    """Search by name, specialty or location (blank lists everyone)."""
    result = app.service(SearchService).search(query_text, specialty=specialty, limit=limit)
    app.emit(result)


@doctors.command(
    examples="""\
  careride doctors get doc_003
  careride --json doctors get doc_001"""
)
@click.argument("doctor_id")
@click.pass_obj
def get(app: AppContext, doctor_id: str) -> None:
    """Show one doctor's profile and why they rank where they do."""
    app.emit(app.service(SearchService).get(doctor_id))


@doctors.command(
    examples="""\
  careride doctors specialties
  careride -q doctors specialties"""
)
@click.pass_obj
def specialties(app: AppContext) -> None:
    """List the specialties doctors can be searched by."""
    app.emit(app.service(SearchService).specialties())
