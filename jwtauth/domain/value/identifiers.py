"""Strongly typed identifiers for domain entities.

Identifiers are database-assigned integers; an entity that has not been
saved yet carries ``None``.
"""

from typing import NewType

UserId = NewType("UserId", int)
UserIdentityId = NewType("UserIdentityId", int)
