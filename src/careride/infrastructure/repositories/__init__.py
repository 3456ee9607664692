"""Read-side repositories mapping store rows to domain records."""

from careride.infrastructure.repositories.doctors import DoctorRepository
from careride.infrastructure.repositories.entitlements import EntitlementRepository
from careride.infrastructure.repositories.messaging import MessageRepository

__all__ = ["DoctorRepository", "EntitlementRepository", "MessageRepository"]
