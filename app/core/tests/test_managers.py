"""
Tests for SoftDeleteManager and SoftDeleteQuerySet.

These tests verify that:
- SoftDeleteManager filters out soft-deleted records by default
- deleted() returns only tombstones
- An unfiltered manager still reaches every row
"""

import pytest

from chat.models import Message
from chat.tests.factories import ChatFactory, MessageFactory


@pytest.fixture
def chat(db):
    return ChatFactory()


@pytest.fixture
def live_and_deleted(chat):
    live = MessageFactory(chat=chat, author=chat.created_by)
    gone = MessageFactory(chat=chat, author=chat.created_by)
    gone.soft_delete()
    return live, gone


@pytest.mark.django_db
class TestSoftDeleteManager:
    def test_default_manager_hides_deleted(self, live_and_deleted):
        live, _ = live_and_deleted

        assert list(Message.objects.all()) == [live]

    def test_filter_and_get_respect_soft_delete(self, live_and_deleted):
        _, gone = live_and_deleted

        assert not Message.objects.filter(pk=gone.pk).exists()
        with pytest.raises(Message.DoesNotExist):
            Message.objects.get(pk=gone.pk)

    def test_deleted_returns_only_tombstones(self, live_and_deleted):
        _, gone = live_and_deleted

        assert list(Message.objects.deleted()) == [gone]

    def test_all_objects_includes_everything(self, live_and_deleted):
        assert Message.all_objects.count() == 2

    def test_count_excludes_deleted(self, live_and_deleted):
        """
        Why it matters: Chat history counts must not include moderated
        messages.
        """
        assert Message.objects.count() == 1

    def test_related_manager_hides_deleted(self, chat, live_and_deleted):
        live, _ = live_and_deleted

        assert list(chat.messages.all()) == [live]


@pytest.mark.django_db
class TestSoftDeleteQuerySet:
    def test_active_and_deleted_filters(self, live_and_deleted):
        live, gone = live_and_deleted
        queryset = Message.objects.deleted()

        assert list(queryset.deleted()) == [gone]
        assert list(queryset.active()) == []
        assert list(Message.objects.get_queryset().active()) == [live]
