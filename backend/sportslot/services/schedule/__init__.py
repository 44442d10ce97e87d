# backend/sportslot/services/schedule/__init__.py
"""
Scheduling core.

Operator side: configuration, generation, staged lifecycle, publication.
Customer side: catalog projection and atomic reservation.
Both sides: data version polling.
"""

from .config import ScheduleConfiguration, load_schedule_configuration, ensure_defaults
from .generator import GenerationRequest, GenerationReport, generate_slots
from .overlap import SlotCandidate, find_conflicts
from .lifecycle import LifecycleResult, SlotDraft
from .reservation import CustomerDetails, ReservationResult, reserve
from .publication import PublicationReport, PendingChanges, publish_all, pending_changes
from .versioning import SyncResult, bump_data_version, get_data_version, poll
from .catalog import CatalogSlot, build_customer_catalog

__all__ = [
    "ScheduleConfiguration",
    "load_schedule_configuration",
    "ensure_defaults",
    "GenerationRequest",
    "GenerationReport",
    "generate_slots",
    "SlotCandidate",
    "find_conflicts",
    "LifecycleResult",
    "SlotDraft",
    "CustomerDetails",
    "ReservationResult",
    "reserve",
    "PublicationReport",
    "PendingChanges",
    "publish_all",
    "pending_changes",
    "SyncResult",
    "bump_data_version",
    "get_data_version",
    "poll",
    "CatalogSlot",
    "build_customer_catalog",
]
