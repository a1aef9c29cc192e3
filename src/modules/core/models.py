"""Base abstract models for the catalog service.

Provides ``TimestampedModel``: ``created_at`` / ``updated_at`` columns
without ORM ``auto_now`` hooks.  Timestamps are assigned explicitly by the
repositories (``stamp_created`` on insert, ``stamp_updated`` on update), so
the persistence layer alone decides when a row counts as modified.
"""

from __future__ import annotations

from datetime import datetime

from django.db import models
from django.utils import timezone


class TimestampedModel(models.Model):
    """Abstract base with explicit timestamp bookkeeping."""

    created_at = models.DateTimeField(editable=False)
    updated_at = models.DateTimeField()

    class Meta:
        abstract = True

    def stamp_created(self, now: datetime | None = None) -> None:
        """Set both timestamps to the same instant (insert path)."""
        now = now or timezone.now()
        self.created_at = now
        self.updated_at = now

    def stamp_updated(self, now: datetime | None = None) -> None:
        """Refresh ``updated_at`` only; ``created_at`` is never touched."""
        self.updated_at = now or timezone.now()
