"""Strongly typed identifiers for Remark domain entities.

Every identifier is a store key segment, so they are plain strings:
post ids come from the blog, comment ids are generated push keys, and
users are keyed by username.
"""

from typing import NewType

PostId = NewType("PostId", str)
CommentId = NewType("CommentId", str)
Username = NewType("Username", str)
