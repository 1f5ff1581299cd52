"""User directory: the owners of scheduled events.

Deleting a user cascades to all of the user's events.
"""

from herald.users.types import User, UserPatch

__all__ = ["User", "UserPatch"]
