"""
Factory Boy factories for chat models.

Usage:
    from chat.tests.factories import ChatFactory, MessageFactory

    chat = ChatFactory(members=[alice, bob])
    message = MessageFactory(chat=chat, author=alice, content="hi")
"""

import factory

from authentication.tests.factories import UserFactory
from chat.models import Chat, ChatKind, ChatMembership, DirectChatPair, Message


class ChatFactory(factory.django.DjangoModelFactory):
    """
    Group chat by default.

    Pass ``members=[...]`` to create memberships for those users.
    """

    class Meta:
        model = Chat
        skip_postgeneration_save = True

    name = factory.Sequence(lambda n: f"Chat {n}")
    kind = ChatKind.GROUP
    created_by = factory.SubFactory(UserFactory)

    @factory.post_generation
    def members(self, create, extracted, **kwargs):
        if not create or not extracted:
            return
        for user in extracted:
            ChatMembership.objects.create(chat=self, user=user)


class DirectChatFactory(ChatFactory):
    """Direct chat between ``members`` (exactly two), with its pair row."""

    name = None
    kind = ChatKind.DIRECT

    @factory.post_generation
    def members(self, create, extracted, **kwargs):
        if not create or not extracted:
            return
        first, second = extracted
        lower, higher = DirectChatPair.canonical(first.id, second.id)
        DirectChatPair.objects.create(chat=self, user_lower_id=lower, user_higher_id=higher)
        for user in extracted:
            ChatMembership.objects.create(chat=self, user=user)


class ChatMembershipFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ChatMembership

    chat = factory.SubFactory(ChatFactory)
    user = factory.SubFactory(UserFactory)


class MessageFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Message

    chat = factory.SubFactory(ChatFactory)
    author = factory.SubFactory(UserFactory)
    content = factory.Faker("sentence")
