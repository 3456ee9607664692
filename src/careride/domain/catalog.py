"""Fixed product catalogs: subscription plans, boost plans, quick replies.

Prices are in cents. A billing month is 30 days.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from careride.domain.models import DAYS_PER_BILLING_MONTH, MS_PER_DAY, format_cents
from careride.domain.types import BillingPeriod, EntitlementKind, QuickReplyCategory


class Plan(BaseModel):
    """A purchasable plan. Boost plans carry a visibility multiplier."""

    model_config = {"frozen": True}

    id: str
    kind: EntitlementKind
    name: str
    description: str
    price_cents: int
    billing_period: BillingPeriod
    features: tuple[str, ...]
    popular: bool = False
    boost_multiplier: float | None = None

    @property
    def display_price(self) -> str:
        return format_cents(self.price_cents)

    @property
    def monthly_equivalent_cents(self) -> int:
        return self.price_cents // self.billing_period.months

    @property
    def duration_ms(self) -> int:
        return self.billing_period.months * DAYS_PER_BILLING_MONTH * MS_PER_DAY

    def to_dict(self) -> dict[str, Any]:
        data = self.model_dump(mode="json")
        data["price"] = self.display_price
        data["billing"] = self.billing_period.description
        data["monthly_equivalent"] = f"{format_cents(self.monthly_equivalent_cents)}/mo"
        return data


SUBSCRIPTION_PLANS: tuple[Plan, ...] = (
    Plan(
        id="plan_monthly",
        kind=EntitlementKind.SUBSCRIPTION,
        name="Monthly",
        description="Flexible month-to-month access",
        price_cents=1999,
        billing_period=BillingPeriod.MONTHLY,
        features=(
            "Message any doctor",
            "Unlimited conversations",
            "24-hour response guarantee",
            "Cancel anytime",
        ),
    ),
    Plan(
        id="plan_yearly",
        kind=EntitlementKind.SUBSCRIPTION,
        name="Annual",
        description="Best value, save 33%",
        price_cents=15999,
        billing_period=BillingPeriod.YEARLY,
        features=(
            "Everything in Monthly",
            "Save 33% vs monthly",
            "Priority support",
            "Cancel anytime",
        ),
        popular=True,
    ),
)

BOOST_PLANS: tuple[Plan, ...] = (
    Plan(
        id="boost_basic",
        kind=EntitlementKind.BOOST,
        name="Basic Boost",
        description="Get noticed by more patients",
        price_cents=4999,
        billing_period=BillingPeriod.MONTHLY,
        features=(
            "Featured badge on profile",
            "Priority in search results",
            "Basic analytics dashboard",
            "Cancel anytime",
        ),
        boost_multiplier=1.5,
    ),
    Plan(
        id="boost_pro",
        kind=EntitlementKind.BOOST,
        name="Pro Boost",
        description="Maximum visibility for your practice",
        price_cents=9999,
        billing_period=BillingPeriod.MONTHLY,
        features=(
            "Everything in Basic",
            "Top placement in search",
            "Advanced analytics",
            "Profile highlight color",
            "Priority support",
        ),
        popular=True,
        boost_multiplier=3.0,
    ),
    Plan(
        id="boost_annual",
        kind=EntitlementKind.BOOST,
        name="Annual Pro",
        description="Best value, 2 months free",
        price_cents=99999,
        billing_period=BillingPeriod.YEARLY,
        features=(
            "Everything in Pro Boost",
            "Save 17% vs monthly",
            "Dedicated account manager",
            "Custom profile badge",
        ),
        boost_multiplier=3.0,
    ),
)

PLANS_BY_KIND: dict[EntitlementKind, tuple[Plan, ...]] = {
    EntitlementKind.SUBSCRIPTION: SUBSCRIPTION_PLANS,
    EntitlementKind.BOOST: BOOST_PLANS,
}


def get_plan(kind: EntitlementKind, plan_id: str) -> Plan | None:
    """Look up a plan of *kind* by id. Returns None for unknown ids."""
    for plan in PLANS_BY_KIND[kind]:
        if plan.id == plan_id:
            return plan
    return None


# --- Quick replies (doctor-side message templates) ---


class QuickReply(BaseModel):
    model_config = {"frozen": True}

    id: str
    label: str
    message: str
    category: QuickReplyCategory


QUICK_REPLIES: tuple[QuickReply, ...] = (
    QuickReply(
        id="qr_greeting_1",
        label="Thank you",
        message="Thank you for reaching out. I'm happy to help.",
        category=QuickReplyCategory.GREETING,
    ),
    QuickReply(
        id="qr_greeting_2",
        label="Hello",
        message="Hello! Thank you for your message. How can I assist you today?",
        category=QuickReplyCategory.GREETING,
    ),
    QuickReply(
        id="qr_schedule_1",
        label="Schedule visit",
        message=(
            "Based on what you've described, I'd recommend scheduling an in-person visit. "
            "Please call our office to book an appointment."
        ),
        category=QuickReplyCategory.SCHEDULING,
    ),
    QuickReply(
        id="qr_schedule_2",
        label="Availability",
        message="I have availability this week. Would you like to schedule a consultation?",
        category=QuickReplyCategory.SCHEDULING,
    ),
    QuickReply(
        id="qr_followup_1",
        label="Need more info",
        message=(
            "Could you please provide more details about your symptoms? "
            "This will help me give you better guidance."
        ),
        category=QuickReplyCategory.FOLLOW_UP,
    ),
    QuickReply(
        id="qr_followup_2",
        label="How are you feeling?",
        message="How are you feeling today? Any changes since we last spoke?",
        category=QuickReplyCategory.FOLLOW_UP,
    ),
    QuickReply(
        id="qr_general_1",
        label="Emergency",
        message=(
            "If you're experiencing a medical emergency, please call 911 "
            "or go to your nearest emergency room immediately."
        ),
        category=QuickReplyCategory.GENERAL,
    ),
    QuickReply(
        id="qr_general_2",
        label="Take care",
        message="Take care and don't hesitate to reach out if you have any more questions.",
        category=QuickReplyCategory.GENERAL,
    ),
)
