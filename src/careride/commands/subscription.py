"""Command group: the patient's messaging subscription."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from careride.commands._base import CareGroup
from careride.services.entitlement import SubscriptionService

if TYPE_CHECKING:
    from careride.commands._context import AppContext

_SUBSCRIPTION_EXAMPLES = """\
  careride subscription plans
  careride subscription purchase plan_monthly
  careride subscription status
  careride subscription cancel
  careride subscription reactivate
  careride subscription restore
  careride --json subscription history"""


@click.group(cls=CareGroup, examples=_SUBSCRIPTION_EXAMPLES)
@click.pass_obj
def subscription(app: AppContext) -> None:
    """Manage the subscription that unlocks messaging doctors."""


@subscription.command(
    examples="""\
  careride subscription plans
  careride -v subscription plans"""
)
@click.pass_obj
def plans(app: AppContext) -> None:
    """List subscription plans (-v shows features)."""
    app.emit(app.service(SubscriptionService).plans())


@subscription.command(
    examples="""\
  careride subscription status
  careride -q subscription status"""
)
@click.pass_obj
def status(app: AppContext) -> None:
    """Show the current subscription status."""
    app.emit(app.service(SubscriptionService).status())


@subscription.command(
    examples="""\
  careride subscription purchase plan_monthly
  careride subscription purchase plan_yearly"""
)
@click.argument("plan_id")
@click.pass_obj
def purchase(app: AppContext, plan_id: str) -> None:
    """Subscribe to PLAN_ID (replaces any current subscription)."""
    app.emit(app.service(SubscriptionService).purchase(plan_id))


@subscription.command(
    examples="""\
  careride subscription cancel"""
)
@click.pass_obj
def cancel(app: AppContext) -> None:
    """Cancel; messaging stays available until the paid period ends."""
    app.emit(app.service(SubscriptionService).cancel())


@subscription.command(
    examples="""\
  careride subscription reactivate"""
)
@click.pass_obj
def reactivate(app: AppContext) -> None:
    """Undo a cancellation before the subscription expires."""
    app.emit(app.service(SubscriptionService).reactivate())


@subscription.command(
    examples="""\
  careride subscription restore"""
)
@click.pass_obj
def restore(app: AppContext) -> None:
    """Restore purchases: re-check the stored subscription."""
    app.emit(app.service(SubscriptionService).refresh())


@subscription.command(
    examples="""\
  careride subscription history
  careride --json subscription history"""
)
@click.pass_obj
def history(app: AppContext) -> None:
    """List past and current subscriptions, newest first."""
    app.emit(app.service(SubscriptionService).history())
