"""
Signal receivers for the chat app.

Every registration and login re-asserts the user's membership in the global
chat. AuthService sends these signals with send_robust(), so an exception
here is logged by the sender and never fails the registration or login.
"""

from django.dispatch import receiver

from authentication.signals import user_logged_in, user_registered
from chat.broadcast import ChannelLayerBroadcaster
from chat.services import ChatDirectoryService


@receiver(user_registered, dispatch_uid="chat_global_on_register")
@receiver(user_logged_in, dispatch_uid="chat_global_on_login")
def join_global_chat(sender, user, **kwargs):
    ChatDirectoryService(ChannelLayerBroadcaster.default()).ensure_global_chat(user)
