"""Strongly typed identifiers for forum domain entities.

Comment ids are integers assigned by the store on insert. User ids are opaque
strings owned by the identity provider.
"""

from typing import NewType

CommentId = NewType("CommentId", int)
UserId = NewType("UserId", str)
