"""Command group: patient/doctor messaging."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from careride.commands._base import CareGroup
from careride.domain.types import Party, QuickReplyCategory
from careride.services.messaging import MessagingService

if TYPE_CHECKING:
    from careride.commands._context import AppContext

_MESSAGES_EXAMPLES = """\
  careride messages inbox
  careride messages start doc_002
  careride messages send conv_001 "Thank you, doctor!"
  careride messages thread conv_001
  careride messages read conv_002
  careride messages inbox --as doctor
  careride messages send conv_003 "See you Tuesday." --as doctor
  careride messages quick-replies --category scheduling"""

_as_option = click.option(
    "--as",
    "party",
    type=click.Choice([str(p) for p in Party]),
    default=str(Party.PATIENT),
    show_default=True,
    help="Act as the configured patient or doctor.",
)


@click.group(cls=CareGroup, examples=_MESSAGES_EXAMPLES)
@click.pass_obj
def messages(app: AppContext) -> None:
    """Message doctors (patients need an active subscription)."""


@messages.command(
    examples="""\
  careride messages inbox
  careride messages inbox --as doctor"""
)
@_as_option
@click.pass_obj
def inbox(app: AppContext, party: str) -> None:
    """List conversations, most recent first."""
    app.emit(app.service(MessagingService).conversations(Party(party)))


@messages.command(
    examples="""\
  careride messages thread conv_001
  careride --json messages thread conv_001
  careride messages thread conv_003 --as doctor"""
)
@click.argument("conversation_id")
@_as_option
@click.pass_obj
def thread(app: AppContext, conversation_id: str, party: str) -> None:
    """Show the messages of one of your conversations, oldest first."""
    app.emit(app.service(MessagingService).messages(conversation_id, Party(party)))


@messages.command(
    examples="""\
  careride messages start doc_005"""
)
@click.argument("doctor_id")
@click.pass_obj
def start(app: AppContext, doctor_id: str) -> None:
    """Open (or reopen) a conversation with DOCTOR_ID."""
    app.emit(app.service(MessagingService).start_conversation(doctor_id))


@messages.command(
    examples="""\
  careride messages send conv_001 "Is Tuesday morning possible?"
  careride messages send conv_003 "Please book a follow-up." --as doctor"""
)
@click.argument("conversation_id")
@click.argument("text")
@_as_option
@click.pass_obj
def send(app: AppContext, conversation_id: str, text: str, party: str) -> None:
    """Send TEXT to a conversation."""
    svc = app.service(MessagingService)
    if Party(party) is Party.DOCTOR:
        result = svc.send_doctor_message(conversation_id, text)
    else:
        result = svc.send_patient_message(conversation_id, text)
    app.emit(result)


@messages.command(
    examples="""\
  careride messages read conv_002
  careride messages read conv_003 --as doctor"""
)
@click.argument("conversation_id")
@_as_option
@click.pass_obj
def read(app: AppContext, conversation_id: str, party: str) -> None:
    """Mark a conversation as read."""
    app.emit(app.service(MessagingService).mark_read(conversation_id, Party(party)))


@messages.command(
    examples="""\
  careride messages unread
  careride -q messages unread --as doctor"""
)
@_as_option
@click.pass_obj
def unread(app: AppContext, party: str) -> None:
    """Count unread messages across all conversations."""
    app.emit(app.service(MessagingService).unread_count(Party(party)))


@messages.command(
    name="quick-replies",
    examples="""\
  careride messages quick-replies
  careride -v messages quick-replies --category greeting""",
)
@click.option(
    "--category",
    type=click.Choice([str(c) for c in QuickReplyCategory]),
    default=None,
    help="Only replies of this category.",
)
@click.pass_obj
def quick_replies(app: AppContext, category: str | None) -> None:
    """List doctor quick-reply templates (-v shows the text)."""
    app.emit(app.service(MessagingService).quick_replies(category))
