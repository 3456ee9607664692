"""MessagingService — patient/doctor conversations.

Patients need an entitlement that grants access (active subscription,
or cancelled but not yet expired) to open conversations and send
messages. Doctors reply without a subscription.

Each conversation keeps one unread counter per side: sending increments
the other side's counter, ``mark_read`` zeroes the reader's.
"""

from __future__ import annotations

import logging
from typing import Any

from careride.domain.catalog import QUICK_REPLIES
from careride.domain.models import Conversation, Message
from careride.domain.types import Party, QuickReplyCategory
from careride.services.base import BaseService
from careride.services.entitlement import SubscriptionService
from careride.services.result import ErrorCode, ServiceResult
from careride.services.telemetry import traced

logger = logging.getLogger(__name__)


def _conversation_item(conversation: Conversation, reader: Party) -> dict[str, Any]:
    last = conversation.last_message
    return {
        "id": conversation.id,
        "patient_id": conversation.patient_id,
        "patient_name": conversation.patient_name,
        "doctor_id": conversation.doctor_id,
        "updated_at": conversation.updated_at,
        "unread": conversation.unread_for(reader),
        "preview": conversation.last_message_preview,
        "last_sender": str(last.sender_type) if last else None,
    }


def _message_item(message: Message) -> dict[str, Any]:
    return message.model_dump(mode="json")


class MessagingService(BaseService):
    """Conversations, messages and unread counters."""

    @property
    def patient_id(self) -> str:
        return self.settings.identity.patient_id

    @property
    def doctor_id(self) -> str:
        return self.settings.identity.doctor_id

    def _subscription_required(self, op: str) -> ServiceResult | None:
        state = SubscriptionService(self._store).current_state()
        if state.can_access():
            return None
        return ServiceResult.failure(
            op,
            ErrorCode.SUBSCRIPTION_REQUIRED,
            "Please subscribe to message doctors",
            status=str(state.status),
        )

    def _validate_content(self, op: str, content: str) -> str | ServiceResult:
        """Trim *content* and enforce the configured length bounds."""
        trimmed = content.strip()
        bounds = self.settings.messaging
        if not trimmed:
            reason = "Message cannot be empty"
        elif len(trimmed) < bounds.min_length:
            reason = "Message is too short"
        elif len(trimmed) > bounds.max_length:
            reason = f"Message is too long (max {bounds.max_length} characters)"
        else:
            return trimmed
        return ServiceResult.failure(op, ErrorCode.INVALID_MESSAGE, reason, length=len(trimmed))

    def _conversation(
        self, op: str, conversation_id: str, party: Party | None = None
    ) -> Conversation | ServiceResult:
        """Load a conversation, optionally requiring *party*'s identity on it."""
        conversation = self._store.messages.get_conversation(conversation_id)
        if conversation is not None and party is not None:
            owner = conversation.patient_id if party is Party.PATIENT else conversation.doctor_id
            mine = self.patient_id if party is Party.PATIENT else self.doctor_id
            if owner != mine:
                conversation = None
        if conversation is None:
            return ServiceResult.failure(
                op, ErrorCode.NOT_FOUND, f"Conversation not found: {conversation_id}"
            )
        return conversation

    # ------------------------------------------------------------------
    # Inboxes
    # ------------------------------------------------------------------

    def conversations(self, reader: Party = Party.PATIENT) -> ServiceResult:
        """The reader's conversations, most recent activity first."""
        if reader is Party.PATIENT:
            found = self._store.messages.for_patient(self.patient_id)
        else:
            found = self._store.messages.for_doctor(self.doctor_id)
        items = [_conversation_item(c, reader) for c in found]
        return ServiceResult.success(
            "conversations", reader=str(reader), count=len(items), items=items
        )

    def patient_conversations(self) -> ServiceResult:
        return self.conversations(Party.PATIENT)

    def doctor_conversations(self) -> ServiceResult:
        return self.conversations(Party.DOCTOR)

    def messages(self, conversation_id: str, reader: Party = Party.PATIENT) -> ServiceResult:
        """A conversation's messages, oldest first; only its own parties may read it."""
        conversation = self._conversation("messages", conversation_id, reader)
        if isinstance(conversation, ServiceResult):
            return conversation
        items = [_message_item(m) for m in self._store.messages.messages(conversation_id)]
        return ServiceResult.success(
            "messages",
            conversation_id=conversation_id,
            doctor_id=conversation.doctor_id,
            count=len(items),
            items=items,
        )

    def unread_count(self, reader: Party = Party.PATIENT) -> ServiceResult:
        if reader is Party.PATIENT:
            found = self._store.messages.for_patient(self.patient_id)
        else:
            found = self._store.messages.for_doctor(self.doctor_id)
        total = sum(c.unread_for(reader) for c in found)
        return ServiceResult.success("unread_count", reader=str(reader), unread=total)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @traced
    def start_conversation(self, doctor_id: str) -> ServiceResult:
        """Get or create the current patient's conversation with *doctor_id*."""
        op = "start_conversation"
        if self._store.doctors.get(doctor_id) is None:
            return ServiceResult.failure(op, ErrorCode.NOT_FOUND, f"Doctor not found: {doctor_id}")
        refused = self._subscription_required(op)
        if refused is not None:
            return refused

        existing = self._store.messages.find_conversation(self.patient_id, doctor_id)
        if existing is not None:
            return ServiceResult.success(
                op, created=False, **_conversation_item(existing, Party.PATIENT)
            )

        now = self._now()
        with self._store.transaction() as txn:
            conversation = Conversation(
                id=txn.next_id("conv_"),
                patient_id=self.patient_id,
                patient_name=self.settings.identity.patient_name,
                doctor_id=doctor_id,
                created_at=now,
                updated_at=now,
            )
            txn.insert_conversation(conversation)
        logger.info("conversation started id=%s doctor=%s", conversation.id, doctor_id)
        return ServiceResult.success(
            op, created=True, **_conversation_item(conversation, Party.PATIENT)
        )

    def _send(self, op: str, conversation_id: str, content: str, sender: Party) -> ServiceResult:
        conversation = self._conversation(op, conversation_id, sender)
        if isinstance(conversation, ServiceResult):
            return conversation
        if sender is Party.PATIENT:
            refused = self._subscription_required(op)
            if refused is not None:
                return refused
        text = self._validate_content(op, content)
        if isinstance(text, ServiceResult):
            return text

        now = self._now()
        sender_id = self.patient_id if sender is Party.PATIENT else self.doctor_id
        with self._store.transaction() as txn:
            message = Message(
                id=txn.next_id("msg_"),
                conversation_id=conversation_id,
                sender_id=sender_id,
                sender_type=sender,
                content=text,
                timestamp=now,
            )
            txn.insert_message(message)
            if sender is Party.PATIENT:
                bump = {"doctor_unread": conversation.doctor_unread + 1}
            else:
                bump = {"patient_unread": conversation.patient_unread + 1}
            txn.update_conversation(conversation.model_copy(update={**bump, "updated_at": now}))

        logger.debug("message %s sent to %s by %s", message.id, conversation_id, sender)
        return ServiceResult.success(op, **_message_item(message))

    @traced
    def send_patient_message(self, conversation_id: str, content: str) -> ServiceResult:
        return self._send("send_message", conversation_id, content, Party.PATIENT)

    @traced
    def send_doctor_message(self, conversation_id: str, content: str) -> ServiceResult:
        return self._send("send_message", conversation_id, content, Party.DOCTOR)

    def mark_read(self, conversation_id: str, reader: Party = Party.PATIENT) -> ServiceResult:
        conversation = self._conversation("mark_read", conversation_id, reader)
        if isinstance(conversation, ServiceResult):
            return conversation
        field = "patient_unread" if reader is Party.PATIENT else "doctor_unread"
        with self._store.transaction() as txn:
            txn.update_conversation(conversation.model_copy(update={field: 0}))
        return ServiceResult.success(
            "mark_read", conversation_id=conversation_id, reader=str(reader), unread=0
        )

    def quick_replies(self, category: str | QuickReplyCategory | None = None) -> ServiceResult:
        replies = list(QUICK_REPLIES)
        if category is not None:
            replies = [r for r in replies if r.category == category]
        items = [r.model_dump(mode="json") for r in replies]
        return ServiceResult.success("quick_replies", count=len(items), items=items)
