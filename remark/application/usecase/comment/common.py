"""Comment response models shared by the comment use cases."""

from remark.application.usecase.base import ApiModel
from remark.domain.model import Comment
from remark.domain.service import CommentTreeNode


class CommentFields(ApiModel):
    """Fields of a stored comment, as returned to clients."""

    id: str
    post_id: str
    parent_id: str
    name: str
    email: str
    comment: str
    date: int
    floor: int
    likes: int
    total_likes: int
    last_sync: int
    is_guest: bool

    @classmethod
    def fields_of(cls, comment: Comment) -> dict:
        return dict(
            id=comment.id,
            post_id=comment.post_id,
            parent_id=comment.parent_id,
            name=comment.name,
            email=comment.email,
            comment=comment.comment,
            date=comment.date,
            floor=comment.floor,
            likes=comment.likes,
            total_likes=comment.total_likes,
            last_sync=comment.last_sync,
            is_guest=comment.is_guest,
        )


class CommentResponse(CommentFields):
    """A single comment with the IDs of its direct replies."""

    children: list[str]

    @classmethod
    def from_domain(cls, comment: Comment) -> "CommentResponse":
        return cls(**cls.fields_of(comment), children=sorted(comment.children))


class CommentTreeNodeResponse(CommentFields):
    """Comment tree node for API response.

    Recursive structure mirroring the domain tree; replies are nested under
    children in floor order.
    """

    children: list["CommentTreeNodeResponse"]

    @classmethod
    def from_domain(cls, node: CommentTreeNode) -> "CommentTreeNodeResponse":
        """Convert a domain CommentTreeNode to response model.

        Args:
            node: Domain comment tree node

        Returns:
            API response model with children recursively converted
        """
        return cls(
            **cls.fields_of(node.comment),
            children=[cls.from_domain(child) for child in node.children],
        )
