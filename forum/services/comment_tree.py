"""Assemble flat comment rows into reply threads.

Comments are linked by ``parent_id``. A comment whose parent is not among the
input rows (for example because the parent's author is suspended and was
filtered out) cannot be reached from a top-level comment, and neither can
anything below it. Such comments are left out of the forest; use
:func:`find_unreachable` to inspect them.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence


@dataclass
class CommentNode:
    comment: Any
    replies: List["CommentNode"] = field(default_factory=list)

    @property
    def id(self) -> int:
        return self.comment.id


def build_comment_tree(comments: Iterable[Any]) -> List[CommentNode]:
    """Build the reply forest from comments exposing ``id`` and ``parent_id``.

    Roots and replies keep the order of the input. When an id occurs more than
    once only the first row is used. Self-references and parent cycles never
    reach a root, so they are dropped like orphans.
    """
    nodes: Dict[int, CommentNode] = {}
    ordered: List[CommentNode] = []
    for comment in comments:
        if comment.id in nodes:
            continue
        node = CommentNode(comment)
        nodes[comment.id] = node
        ordered.append(node)

    roots: List[CommentNode] = []
    children: Dict[int, List[CommentNode]] = defaultdict(list)
    for node in ordered:
        parent_id = node.comment.parent_id
        if parent_id is None:
            roots.append(node)
        elif parent_id != node.id and parent_id in nodes:
            children[parent_id].append(node)

    # Every node sits in at most one child list, so each is visited once.
    pending = list(roots)
    while pending:
        node = pending.pop()
        node.replies = children.get(node.id, [])
        pending.extend(node.replies)

    return roots


def iter_nodes(forest: Sequence[CommentNode]):
    """Yield every node of the forest, parents before their replies."""
    stack = list(reversed(forest))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.replies))


def count_comments(forest: Sequence[CommentNode]) -> int:
    """Number of comments in the forest, replies included."""
    return sum(1 for _ in iter_nodes(forest))


def find_unreachable(comments: Iterable[Any], forest: Sequence[CommentNode]) -> List[Any]:
    """Input comments that did not make it into the forest."""
    placed = {id(node.comment) for node in iter_nodes(forest)}
    return [comment for comment in comments if id(comment) not in placed]
