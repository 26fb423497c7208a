"""
Tests for chat app.

This package contains test modules for:
- test_models.py: Chat, DirectChatPair, ChatMembership, Message model tests
- test_services.py: ChatDirectoryService and MessageIngestService tests
- test_consumers.py: WebSocket consumer tests
- test_middleware.py: WebSocket JWT middleware tests
- test_events.py: Client event parsing tests
- test_views.py: REST API endpoint tests
- test_validators.py: Media validation tests
- test_encryption.py: At-rest message encryption tests

Usage:
    pytest chat/tests/
    pytest chat/tests/test_consumers.py
"""
