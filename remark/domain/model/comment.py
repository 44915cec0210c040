"""Comment entity.

Comments form a forest per post. Each record lists its direct children and
carries a denormalized subtree like total that the like aggregator keeps
up to date.
"""

from typing import Any

from pydantic import Field, field_serializer, field_validator

from remark.domain.model.common import DomainModel
from remark.domain.value import ROOT_PARENT_ID, CommentId, PostId


class Comment(DomainModel):
    """Comment entity.

    Threading is managed through:
    - parent_id: Direct parent comment ("0" for top-level)
    - children: Ids of direct replies
    - floor: 1-based position among siblings at insertion time

    Like counters:
    - likes: Likes on this comment only
    - total_likes: likes plus total_likes of every child
    - last_sync: When total_likes was last recomputed (ms since epoch)
    """

    id: CommentId
    post_id: PostId = Field(exclude=True)  # Implied by the record path
    parent_id: CommentId = ROOT_PARENT_ID
    name: str
    email: str = ""
    comment: str
    date: int = 0
    floor: int = 0
    likes: int = 0
    total_likes: int = 0
    children: frozenset[CommentId] = frozenset()
    last_sync: int = 0
    is_guest: bool = False

    @field_validator("parent_id", mode="before")
    @classmethod
    def default_parent(cls, v: Any) -> Any:
        """Missing or empty parentId means top-level."""
        return v or ROOT_PARENT_ID

    @field_validator("likes", "total_likes", mode="before")
    @classmethod
    def clamp_counter(cls, v: Any) -> int:
        """Counters are never negative."""
        return max(0, int(v or 0))

    @field_validator("children", mode="before")
    @classmethod
    def migrate_children(cls, v: Any) -> frozenset[str]:
        """Accept every children shape found in stored records.

        Older records keep an array of {id} stubs or of plain ids; current
        ones keep an object keyed by child id.
        """
        if not v:
            return frozenset()
        if isinstance(v, dict):
            items = v.keys()
        else:
            items = (item.get("id") if isinstance(item, dict) else item for item in v)
        return frozenset(str(item) for item in items if item)

    @field_serializer("children")
    def serialize_children(self, children: frozenset[CommentId]) -> dict[str, bool]:
        return {child_id: True for child_id in sorted(children)}

    @property
    def is_top_level(self) -> bool:
        return self.parent_id == ROOT_PARENT_ID

    def is_stale(self, now_ms: int, stale_after_ms: int) -> bool:
        """Whether total_likes is due for a recompute."""
        return self.last_sync < now_ms - stale_after_ms
