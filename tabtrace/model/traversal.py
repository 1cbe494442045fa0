"""
tabtrace/model/traversal.py

Leaf-first walks over record trees.

traverse_leaf_first() visits nodes for side effects; transform_leaf_first()
rebuilds the tree bottom-up without touching the input. Both visit children
in order and every child before its parent.
"""

from typing import Callable, Protocol, Sequence, TypeVar

from tabtrace.data_models.events import EventRecord, UnNormalizedEventRecord


class RecordTreeNode(Protocol):
    """Anything with an ordered sequence of child nodes."""
    @property
    def children(self) -> Sequence["RecordTreeNode"]: ...


NodeT = TypeVar("NodeT", bound=RecordTreeNode)
ResultT = TypeVar("ResultT")


def traverse_leaf_first(record: NodeT, visit: Callable[[NodeT], None]) -> None:
    """
    Visit every node of a record tree exactly once, children before parent.
    Args:
        record: Root of the tree.
        visit: Called once per node.
    """
    for child in record.children:
        traverse_leaf_first(child, visit)
    visit(record)


def transform_leaf_first(
    record: NodeT,
    transform: Callable[[NodeT, list[ResultT]], ResultT],
) -> ResultT:
    """
    Build a new tree from a record tree, children before parent.
    Args:
        record: Root of the input tree. Not modified.
        transform: Called once per node with the node and its already transformed children.
    Returns:
        The transformed root.
    """
    new_children = [transform_leaf_first(child, transform) for child in record.children]
    return transform(record, new_children)


def ensure_types(record: UnNormalizedEventRecord) -> UnNormalizedEventRecord:
    """
    Return a copy of the tree with every node's type tag resolved.
    """
    return transform_leaf_first(
        record,
        lambda node, children: node.with_resolved_type(children),
    )


def normalize_times(record: UnNormalizedEventRecord, base_time: float) -> EventRecord:
    """
    Convert a raw tree into a normalized EventRecord tree.
    Args:
        record: Raw tree with times in seconds on the source clock.
        base_time: Base time in milliseconds on the source clock.
    Returns:
        The normalized tree, times in milliseconds relative to base_time.
    """
    return transform_leaf_first(
        record,
        lambda node, children: node.to_event_record(base_time=base_time, children=children),
    )
