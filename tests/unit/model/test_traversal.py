"""
tests/unit/model/test_traversal.py

Tests for leaf-first record tree traversal.
"""

import pytest

from conftest import make_raw_record
from tabtrace.data_models.events import EventRecordType, UnNormalizedEventRecord
from tabtrace.model.traversal import (
    ensure_types,
    normalize_times,
    transform_leaf_first,
    traverse_leaf_first,
)


@pytest.fixture
def tree() -> UnNormalizedEventRecord:
    """
    A(B(C), D) with distinct start times for identification.
    """
    return UnNormalizedEventRecord.model_validate(
        make_raw_record("FunctionCall", 1.0, data={"name": "A"}, children=[
            make_raw_record("Layout", 1.1, data={"name": "B"}, children=[
                make_raw_record(3, 1.2, data={"name": "C"}),
            ]),
            make_raw_record("Custom", 1.3, data={"name": "D"}),
        ])
    )


class TestTraverseLeafFirst:

    def test_children_before_parent_in_order(self, tree: UnNormalizedEventRecord) -> None:
        visited: list[str] = []
        traverse_leaf_first(tree, lambda node: visited.append(node.data["name"]))

        assert visited == ["C", "B", "D", "A"]

    def test_single_node(self) -> None:
        leaf = UnNormalizedEventRecord.model_validate(make_raw_record(1, 1.0))
        visited = []
        traverse_leaf_first(leaf, visited.append)

        assert visited == [leaf]


class TestTransformLeafFirst:

    def test_receives_transformed_children(self, tree: UnNormalizedEventRecord) -> None:
        result = transform_leaf_first(
            tree,
            lambda node, children: f"{node.data['name']}({','.join(children)})",
        )
        assert result == "A(B(C()),D())"

    def test_ensure_types_resolves_every_node(self, tree: UnNormalizedEventRecord) -> None:
        resolved = ensure_types(tree)

        assert resolved.type is EventRecordType.JAVASCRIPT_EXECUTION
        assert resolved.children[0].type is EventRecordType.LAYOUT
        assert resolved.children[0].children[0].type is EventRecordType.PAINT
        assert resolved.children[1].type == "Custom"

    def test_ensure_types_leaves_input_untouched(self, tree: UnNormalizedEventRecord) -> None:
        ensure_types(tree)

        assert tree.type == "FunctionCall"
        assert tree.children[0].type == "Layout"

    def test_normalize_times(self, tree: UnNormalizedEventRecord) -> None:
        normalized = normalize_times(ensure_types(tree), base_time=1000.0)

        assert normalized.time == pytest.approx(0.0)
        assert normalized.children[0].time == pytest.approx(100.0)
        assert normalized.children[0].children[0].time == pytest.approx(200.0)
        assert normalized.children[1].time == pytest.approx(300.0)
        assert tree.start_time == 1.0
