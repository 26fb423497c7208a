"""
Test configuration and fixtures for chat tests.

This module provides:
- RecordingBroadcaster: in-memory Broadcaster that records every event
- User, chat and message fixtures
- Image upload fixtures generated with Pillow

Usage:
    def test_example(group_chat, alice, broadcaster):
        service = MessageIngestService(broadcaster)
        ...
        assert broadcaster.events == [("chat", group_chat.id, "newMessage", ...)]
"""

from __future__ import annotations

import io
import struct

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image

from authentication.tests.factories import AdminUserFactory, UserFactory
from chat.tests.factories import ChatFactory, DirectChatFactory, MessageFactory


# =============================================================================
# Broadcaster
# =============================================================================


class RecordingBroadcaster:
    """
    Broadcaster that records calls instead of publishing.

    Each event is (scope, target, event, payload) where scope is "chat",
    "user" or "everyone" and target is the id (None for everyone).
    """

    def __init__(self):
        self.events: list[tuple] = []

    def to_chat(self, chat_id, event, payload):
        self.events.append(("chat", chat_id, event, payload))

    def to_user(self, user_id, event, payload):
        self.events.append(("user", user_id, event, payload))

    def to_everyone(self, event, payload):
        self.events.append(("everyone", None, event, payload))

    def of(self, event):
        return [e for e in self.events if e[2] == event]


@pytest.fixture
def broadcaster():
    return RecordingBroadcaster()


# =============================================================================
# Users
# =============================================================================


@pytest.fixture
def alice(db):
    return UserFactory(username="alice", email="alice@example.com")


@pytest.fixture
def bob(db):
    return UserFactory(username="bob", email="bob@example.com")


@pytest.fixture
def carol(db):
    return UserFactory(username="carol", email="carol@example.com")


@pytest.fixture
def admin_user(db):
    return AdminUserFactory(username="admin", email="admin@example.com")


# =============================================================================
# Chats and messages
# =============================================================================


@pytest.fixture
def group_chat(alice, bob):
    """Group chat created by alice with alice and bob as members."""
    return ChatFactory(name="Team", created_by=alice, members=[alice, bob])


@pytest.fixture
def other_chat(carol):
    """Chat alice and bob are not in."""
    return ChatFactory(name="Elsewhere", created_by=carol, members=[carol])


@pytest.fixture
def direct_chat(alice, bob):
    return DirectChatFactory(created_by=alice, members=[alice, bob])


@pytest.fixture
def message(group_chat, alice):
    return MessageFactory(chat=group_chat, author=alice, content="hello team")


# =============================================================================
# Uploads
# =============================================================================


def make_image_bytes(image_format: str) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), color="red").save(buffer, format=image_format)
    return buffer.getvalue()


@pytest.fixture
def png_upload():
    return SimpleUploadedFile("photo.png", make_image_bytes("PNG"), content_type="image/png")


@pytest.fixture
def gif_upload():
    return SimpleUploadedFile("funny.gif", make_image_bytes("GIF"), content_type="image/gif")


@pytest.fixture
def text_upload():
    """Plain text that claims to be an image."""
    return SimpleUploadedFile("fake.png", b"definitely not an image", content_type="image/png")


def make_oversized_gif() -> bytes:
    """
    A tiny GIF whose header declares a 65535x65535 canvas.

    The file is well under the upload size cap but far past Pillow's
    decompression bomb limit.
    """
    header = b"GIF89a" + struct.pack("<HHBBB", 65535, 65535, 0, 0, 0)
    descriptor = b"," + struct.pack("<HHHHB", 0, 0, 1, 1, 0)
    pixels = b"\x02\x02\x4c\x01\x00"
    return header + descriptor + pixels + b";"


@pytest.fixture
def oversized_gif_upload():
    return SimpleUploadedFile("bomb.gif", make_oversized_gif(), content_type="image/gif")
