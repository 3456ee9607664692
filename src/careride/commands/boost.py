"""Command group: the doctor's search boost."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from careride.commands._base import CareGroup
from careride.services.entitlement import BoostService

if TYPE_CHECKING:
    from careride.commands._context import AppContext

_BOOST_EXAMPLES = """\
  careride boost plans
  careride boost purchase boost_pro
  careride boost status
  careride boost analytics
  careride boost cancel
  careride boost reactivate"""


@click.group(cls=CareGroup, examples=_BOOST_EXAMPLES)
@click.pass_obj
def boost(app: AppContext) -> None:
    """Manage the boost that places your profile first in search."""


@boost.command(
    examples="""\
  careride boost plans
  careride -v boost plans"""
)
@click.pass_obj
def plans(app: AppContext) -> None:
    """List boost plans and their visibility multipliers."""
    app.emit(app.service(BoostService).plans())


@boost.command(
    examples="""\
  careride boost status
  careride --json boost status"""
)
@click.pass_obj
def status(app: AppContext) -> None:
    """Show the current boost status."""
    app.emit(app.service(BoostService).status())


@boost.command(
    examples="""\
  careride boost purchase boost_basic
  careride boost purchase boost_annual"""
)
@click.argument("plan_id")
@click.pass_obj
def purchase(app: AppContext, plan_id: str) -> None:
    """Boost your profile on PLAN_ID (replaces any current boost)."""
    app.emit(app.service(BoostService).purchase(plan_id))


@boost.command(
    examples="""\
  careride boost cancel"""
)
@click.pass_obj
def cancel(app: AppContext) -> None:
    """Cancel; sponsored placement continues until the period ends."""
    app.emit(app.service(BoostService).cancel())


@boost.command(
    examples="""\
  careride boost reactivate"""
)
@click.pass_obj
def reactivate(app: AppContext) -> None:
    """Undo a cancellation before the boost expires."""
    app.emit(app.service(BoostService).reactivate())


@boost.command(
    examples="""\
  careride boost analytics
  careride --json boost analytics"""
)
@click.pass_obj
def analytics(app: AppContext) -> None:
    """Profile views, search appearances and position for the last 30 days."""
    app.emit(app.service(BoostService).analytics())
