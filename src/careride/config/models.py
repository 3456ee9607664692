"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, careride.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel

from careride.domain.ranking import HIGH_RATING_THRESHOLD, TieBreak

# --- careride.toml sections ---


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    in_memory: bool = False
    path: str = ".careride/careride.db"  # relative to the workspace root
    seed: bool = True


class SearchConfig(BaseModel):
    """[search] section."""

    model_config = {"frozen": True}

    tie_break: TieBreak = TieBreak.ORIGINAL
    high_rating_threshold: float = HIGH_RATING_THRESHOLD
    max_query_length: int = 100


class IdentityConfig(BaseModel):
    """[identity] section — the simulated signed-in users."""

    model_config = {"frozen": True}

    patient_id: str = "patient_001"
    patient_name: str = "John Smith"
    doctor_id: str = "doc_001"


class MessagingConfig(BaseModel):
    """[messaging] section."""

    model_config = {"frozen": True}

    min_length: int = 2
    max_length: int = 2000

