"""
Serializers for the moderation API.
"""

from rest_framework import serializers

from authentication.serializers import UserSerializer
from chat.serializers import MessageSerializer


class StrictBooleanField(serializers.BooleanField):
    """Accepts only JSON true/false; "true", 1 and friends are rejected."""

    default_error_messages = {"invalid": "Banned status must be boolean"}

    def to_internal_value(self, data):
        if not isinstance(data, bool):
            self.fail("invalid")
        return data


class BanSerializer(serializers.Serializer):
    banned = StrictBooleanField()


class BanResponseSerializer(serializers.Serializer):
    user = UserSerializer()
    message = serializers.CharField()


class MessageDeleteResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    deletedMessage = MessageSerializer()
