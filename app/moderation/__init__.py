"""
Moderation app.

Privileged operations for platform administrators:
- Listing users and recent messages
- Banning and unbanning users
- Soft-deleting messages and rebroadcasting them to every connection
"""
