"""
Authentication lifecycle signals.

This module defines the signals AuthService sends after an account is created
or logs in. Other apps subscribe to them instead of being called directly
(the chat app uses them to bootstrap global-chat membership).

Signals:
    user_registered: sent after a successful registration
    user_logged_in: sent after a successful credential login

Both carry ``user`` as a keyword argument. They are sent with send_robust(),
so a failing receiver is logged by the sender and never aborts registration
or login.
"""

import logging

from django.dispatch import Signal

logger = logging.getLogger(__name__)

user_registered = Signal()
user_logged_in = Signal()


def send_best_effort(signal: Signal, sender, **kwargs) -> None:
    """
    Send a signal, logging (not raising) any receiver failure.

    Args:
        signal: The signal to send
        sender: Signal sender (the User class)
        **kwargs: Signal payload
    """
    for receiver, response in signal.send_robust(sender=sender, **kwargs):
        if isinstance(response, Exception):
            logger.error(
                f"Receiver {getattr(receiver, '__qualname__', receiver)} failed: {response}",
                exc_info=response,
            )
