"""
Reusable model mixins.

Mixins:
    SoftDeleteMixin: Tombstone support (is_deleted, deleted_at)

Usage:
    from core.managers import SoftDeleteManager
    from core.model_mixins import SoftDeleteMixin
    from core.models import BaseModel

    class Note(SoftDeleteMixin, BaseModel):
        objects = SoftDeleteManager()
        all_objects = models.Manager()

Note:
    Always list mixins before BaseModel in inheritance.
"""

from __future__ import annotations

from django.db import models
from django.utils import timezone


class SoftDeleteMixin(models.Model):
    """
    Soft delete support for models.

    Instead of removing rows, marks them as deleted. Deleted rows stay
    fetchable through an unfiltered manager and are never purged by the
    application.

    Fields:
        is_deleted: Boolean flag indicating soft delete status
        deleted_at: Timestamp when the record was soft deleted

    Note:
        - Pair with SoftDeleteManager as the default manager
        - Add all_objects = models.Manager() to reach deleted rows
    """

    is_deleted = models.BooleanField(
        default=False,
        db_index=True,
        help_text="Whether this record has been soft deleted",
    )
    deleted_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Timestamp when this record was soft deleted",
    )

    class Meta:
        abstract = True

    def soft_delete(self) -> bool:
        """
        Mark this record as deleted.

        Sets is_deleted=True and deleted_at to the current time. Calling it on
        an already deleted record leaves the original deleted_at untouched.

        Returns:
            True if the record changed, False if it was already deleted
        """
        if self.is_deleted:
            return False
        self.is_deleted = True
        self.deleted_at = timezone.now()
        self.save(update_fields=["is_deleted", "deleted_at", "updated_at"])
        return True

