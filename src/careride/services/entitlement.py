"""Entitlement services — patient subscriptions and doctor boosts.

Both follow the same lifecycle (``domain.lifecycle``); they differ only
in record kind, plan catalog and whose record is current:

- SubscriptionService: the configured patient; gates messaging.
- BoostService: the configured doctor; gates sponsored placement.

Operations: plans, status, purchase, cancel, reactivate, refresh,
history. Records are never deleted; a purchase inserts a new record
which becomes the owner's current one.
"""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from typing import ClassVar

from careride.domain.catalog import PLANS_BY_KIND, get_plan
from careride.domain.lifecycle import EntitlementState, EntitlementStatus, is_valid_transition
from careride.domain.models import BoostAnalytics, EntitlementRecord
from careride.domain.types import EntitlementKind
from careride.services.base import BaseService
from careride.services.result import ErrorCode, ServiceResult
from careride.services.telemetry import traced

logger = logging.getLogger(__name__)


class EntitlementService(BaseService, ABC):
    """Shared purchase/cancel/reactivate logic for one entitlement kind."""

    kind: ClassVar[EntitlementKind]
    id_prefix: ClassVar[str]
    noun: ClassVar[str]

    @property
    @abstractmethod
    def owner_id(self) -> str:
        """Id of the patient or doctor whose records this service manages."""

    def _op(self, action: str) -> str:
        return f"{self.kind}_{action}"

    def current_state(self) -> EntitlementState:
        record = self._store.entitlements.current(self.kind, self.owner_id)
        return EntitlementState.of(record, self._now())

    def can_access(self) -> bool:
        return self.current_state().can_access()

    def _state_result(self, action: str, state: EntitlementState) -> ServiceResult:
        return ServiceResult.success(self._op(action), owner_id=self.owner_id, **state.to_dict())

    def plans(self) -> ServiceResult:
        items = [plan.to_dict() for plan in PLANS_BY_KIND[self.kind]]
        return ServiceResult.success(self._op("plans"), count=len(items), items=items)

    @traced
    def status(self) -> ServiceResult:
        return self._state_result("status", self.current_state())

    @traced
    def refresh(self) -> ServiceResult:
        """Re-derive status from the stored record (restore purchases)."""
        state = self.current_state()
        logger.info("%s refreshed owner=%s status=%s", self.kind, self.owner_id, state.status)
        return self._state_result("refresh", state)

    @traced
    def purchase(self, plan_id: str) -> ServiceResult:
        """Start a new entitlement on *plan_id*, replacing any current one."""
        op = self._op("purchase")
        plan = get_plan(self.kind, plan_id)
        if plan is None:
            return ServiceResult.failure(
                op,
                ErrorCode.INVALID_PLAN,
                f"Invalid plan ID: {plan_id}",
                valid=[p.id for p in PLANS_BY_KIND[self.kind]],
            )

        previous = self.current_state()
        now = self._now()
        with self._store.transaction() as txn:
            record = EntitlementRecord(
                id=txn.next_id(self.id_prefix),
                kind=self.kind,
                owner_id=self.owner_id,
                plan_id=plan.id,
                plan_name=plan.name,
                price_cents=plan.price_cents,
                billing_period=plan.billing_period,
                boost_multiplier=plan.boost_multiplier,
                created_at=now,
                expires_at=now + plan.duration_ms,
            )
            txn.insert_entitlement(record)

        logger.info(
            "%s purchased owner=%s plan=%s previous=%s",
            self.kind,
            self.owner_id,
            plan.id,
            previous.status,
        )
        result = self._state_result("purchase", EntitlementState.of(record, now))
        if previous.record is not None and previous.can_access():
            replaced = f"Replaced {previous.status} {self.noun} {previous.record.id}"
            return result.with_warning(replaced)
        return result

    @traced
    def cancel(self) -> ServiceResult:
        """Cancel the current entitlement; access continues until expiry."""
        op = self._op("cancel")
        state = self.current_state()
        if state.record is None:
            return ServiceResult.failure(
                op, ErrorCode.NOT_FOUND, f"No active {self.noun} to cancel"
            )
        if not is_valid_transition(state.status, EntitlementStatus.CANCELLED):
            return ServiceResult.failure(
                op,
                ErrorCode.INVALID_TRANSITION,
                f"Cannot cancel a {state.status} {self.noun}",
                status=str(state.status),
            )

        cancelled = state.record.model_copy(update={"cancelled_at": state.as_of})
        with self._store.transaction() as txn:
            txn.update_entitlement(cancelled)
        logger.info("%s cancelled owner=%s id=%s", self.kind, self.owner_id, cancelled.id)
        return self._state_result("cancel", EntitlementState.of(cancelled, state.as_of))

    @traced
    def reactivate(self) -> ServiceResult:
        """Undo a cancellation, allowed only while the record has not expired."""
        op = self._op("reactivate")
        state = self.current_state()
        if state.record is None:
            return ServiceResult.failure(
                op, ErrorCode.NOT_FOUND, f"No {self.noun} to reactivate"
            )
        if state.status is not EntitlementStatus.CANCELLED:
            return ServiceResult.failure(
                op,
                ErrorCode.INVALID_TRANSITION,
                f"Cannot reactivate a {state.status} {self.noun}",
                status=str(state.status),
            )

        reactivated = state.record.model_copy(update={"cancelled_at": None})
        with self._store.transaction() as txn:
            txn.update_entitlement(reactivated)
        logger.info("%s reactivated owner=%s id=%s", self.kind, self.owner_id, reactivated.id)
        return self._state_result("reactivate", EntitlementState.of(reactivated, state.as_of))

    def history(self) -> ServiceResult:
        now = self._now()
        items = []
        for record in self._store.entitlements.history(self.kind, self.owner_id):
            item = record.to_dict()
            item["status"] = str(EntitlementState.of(record, now).status)
            items.append(item)
        return ServiceResult.success(self._op("history"), count=len(items), items=items)


class SubscriptionService(EntitlementService):
    """Patient messaging subscription."""

    kind = EntitlementKind.SUBSCRIPTION
    id_prefix = "sub_"
    noun = "subscription"

    @property
    def owner_id(self) -> str:
        return self.settings.identity.patient_id


class BoostService(EntitlementService):
    """Doctor boost (paid search placement)."""

    kind = EntitlementKind.BOOST
    id_prefix = "boost_"
    noun = "boost"

    @property
    def owner_id(self) -> str:
        return self.settings.identity.doctor_id

    def analytics(self) -> ServiceResult:
        """Stub dashboard numbers, stable per doctor and boost state."""
        boosted = self.can_access()
        rng = random.Random(f"{self.owner_id}:{int(boosted)}")

        base_views, base_searches, base_messages, base_position = (
            (150, 320, 12, 2.3) if boosted else (45, 95, 3, 8.5)
        )
        analytics = BoostAnalytics(
            profile_views=base_views + rng.randint(-20, 29),
            profile_views_change=rng.randint(20, 49) if boosted else rng.randint(-5, 9),
            search_appearances=base_searches + rng.randint(-30, 49),
            search_appearances_change=rng.randint(50, 119) if boosted else rng.randint(-10, 19),
            message_requests=base_messages + rng.randint(-2, 4),
            message_requests_change=rng.randint(3, 7) if boosted else rng.randint(-1, 1),
            average_position=round(base_position + rng.random() * 2 - 1, 1),
            position_change=round(-(rng.random() * 3 + 1) if boosted else rng.random() * 2, 1),
        )
        return ServiceResult.success(
            self._op("analytics"),
            owner_id=self.owner_id,
            boosted=boosted,
            **analytics.to_dict(),
        )
