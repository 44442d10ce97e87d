# backend/sportslot/schemas/publication.py

from typing import Optional

from .common import CamelModel


class PublicationResult(CamelModel):
    success: bool = True
    published: int
    published_closures: int
    deleted: int
    version: Optional[int] = None


class PendingChangesRead(CamelModel):
    draft_slots: int
    outside_hours_slots: int
    pending_deletions: int
    draft_closures: int
    pending_closure_deletions: int
    has_changes: bool
