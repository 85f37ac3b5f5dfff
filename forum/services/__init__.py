"""Services package for the forum application."""

from .comment_tree import CommentNode, build_comment_tree, count_comments, find_unreachable
from .voting import VoteState, next_polarity

__all__ = [
    "CommentNode",
    "build_comment_tree",
    "count_comments",
    "find_unreachable",
    "VoteState",
    "next_polarity",
]
