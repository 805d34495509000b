"""
Test suite for GraphModel.

Covers construction from raw snapshots, node and edge primitives,
the handle index, snapshot export and diffing.
"""

import pytest

from core.flowgraph import (
    EdgeSpec,
    GraphModel,
    HandleDirection,
    NodeBuilder,
    NodeKind,
    StepMode,
)
from core.flowgraph.exceptions import (
    DuplicateNodeError,
    EdgeNotFoundError,
    GraphIntegrityError,
    HandleConflictError,
    InvalidEndpointError,
    NodeNotFoundError,
    NodeValidationError,
)


# ============================================================================
# CONSTRUCTION TESTS
# ============================================================================

@pytest.mark.unit
class TestGraphConstruction:
    """Test building graphs from node and edge lists."""

    def test_empty_graph(self):
        graph = GraphModel()

        assert len(graph) == 0
        assert graph.edges == ()

    def test_duplicate_node_ids_rejected(self, start_node):
        with pytest.raises(GraphIntegrityError):
            GraphModel([start_node, start_node])

    def test_duplicate_edge_ids_rejected(self, start_node, end_node):
        edges = [
            EdgeSpec(id="e1", source="start", target="end"),
            EdgeSpec(id="e1", source="start", target="end", source_handle="b"),
        ]
        with pytest.raises(GraphIntegrityError):
            GraphModel([start_node, end_node], edges)

    def test_edge_with_missing_endpoint_rejected(self, start_node):
        with pytest.raises(GraphIntegrityError) as exc_info:
            GraphModel([start_node], [EdgeSpec(id="e1", source="start", target="ghost")])

        assert exc_info.value.details["node_id"] == "ghost"

    def test_invariant_violations_are_accepted(self, start_node, end_node, make_step):
        """Two edges on one handle is a validation problem, not a construction one."""
        nodes = [start_node, make_step("s1"), make_step("s2"), end_node]
        edges = [
            EdgeSpec(id="e1", source="start", target="s1"),
            EdgeSpec(id="e2", source="start", target="s2"),
        ]
        graph = GraphModel(nodes, edges)

        assert len(graph.edges_at_handle("start", None, HandleDirection.SOURCE)) == 2

    def test_from_snapshot(self, two_step_graph):
        rebuilt = GraphModel.from_snapshot(two_step_graph.to_snapshot())

        assert rebuilt == two_step_graph

    def test_from_snapshot_accepts_legacy_step_kind(self):
        snapshot = {
            "nodes": [{
                "id": "g1",
                "type": "stepGroup",
                "position": {"x": 1, "y": 2},
                "data": {"title": "Legacy", "agents": ["a"]},
            }],
            "edges": [],
        }
        graph = GraphModel.from_snapshot(snapshot)

        assert graph.get_node("g1").kind == NodeKind.STEP_GROUP
        assert graph.get_node("g1").data.label == "Legacy"

    def test_from_snapshot_legacy_step_without_title(self):
        snapshot = {
            "nodes": [{
                "id": "step-1",
                "type": "stepGroup",
                "position": {"x": 100, "y": 250},
                "data": {"label": "Review", "mode": "parallel", "purpose": "Check", "agents": ["a", "b"]},
            }],
            "edges": [],
        }

        data = GraphModel.from_snapshot(snapshot).get_node("step-1").data

        assert data.title == "Review"
        assert data.label == "Review"
        assert data.mode == StepMode.PARALLEL
        assert data.agents == ["a", "b"]

    def test_from_snapshot_malformed_entry(self):
        snapshot = {"nodes": [{"id": "x", "type": "mystery", "data": {}}], "edges": []}

        with pytest.raises(GraphIntegrityError):
            GraphModel.from_snapshot(snapshot)

    @pytest.mark.parametrize("snapshot", [
        {"nodes": 5, "edges": []},
        {"nodes": [], "edges": "e1"},
    ])
    def test_from_snapshot_rejects_non_list_parts(self, snapshot):
        with pytest.raises(GraphIntegrityError):
            GraphModel.from_snapshot(snapshot)


# ============================================================================
# NODE PRIMITIVE TESTS
# ============================================================================

@pytest.mark.unit
class TestNodePrimitives:
    """Test add/remove/update of nodes."""

    def test_add_node_returns_new_snapshot(self, start_node):
        empty = GraphModel()
        graph = empty.add_node(start_node)

        assert "start" in graph
        assert "start" not in empty

    def test_add_duplicate_node(self, start_node):
        graph = GraphModel([start_node])

        with pytest.raises(DuplicateNodeError):
            graph.add_node(start_node)

    def test_remove_node_cascades_to_edges(self, two_step_graph):
        graph = two_step_graph.remove_node("s1")

        assert "s1" not in graph
        assert graph.edge_ids == ("e-s2-end",)
        assert len(two_step_graph.edges) == 3

    def test_remove_missing_node_is_noop(self, two_step_graph):
        assert two_step_graph.remove_node("ghost") is two_step_graph

    def test_update_node_data(self, two_step_graph):
        graph = two_step_graph.update_node_data("s1", purpose="New purpose", agents=["a", "b"])

        assert graph.get_node("s1").data.purpose == "New purpose"
        assert graph.get_node("s1").data.agents == ["a", "b"]
        assert two_step_graph.get_node("s1").data.agents == ["planner"]

    def test_update_title_updates_default_label(self, two_step_graph):
        graph = two_step_graph.update_node_data("s1", title="Design")

        assert graph.get_node("s1").data.label == "Design"

    def test_update_unknown_node(self, two_step_graph):
        with pytest.raises(NodeNotFoundError):
            two_step_graph.update_node_data("ghost", title="x")

    def test_update_with_invalid_value(self, two_step_graph):
        with pytest.raises(NodeValidationError) as exc_info:
            two_step_graph.update_node_data("s1", title="   ")

        assert exc_info.value.node_id == "s1"

    def test_move_node(self, two_step_graph):
        graph = two_step_graph.move_node("s1", 40, 80)

        assert graph.get_node("s1").position.x == 40
        assert graph.get_node("s1").position.y == 80

    def test_nodes_of_kind(self, two_step_graph):
        steps = two_step_graph.nodes_of_kind(NodeKind.STEP_GROUP)

        assert [n.id for n in steps] == ["s1", "s2"]


# ============================================================================
# EDGE PRIMITIVE TESTS
# ============================================================================

@pytest.mark.unit
class TestEdgePrimitives:
    """Test add/remove/replace of edges and the handle index."""

    def test_add_edge(self, start_node, end_node):
        graph = GraphModel([start_node, end_node])
        graph = graph.add_edge(EdgeSpec(id="e1", source="start", target="end"))

        assert graph.has_edge("e1")
        assert graph.outgoing_edges("start")[0].id == "e1"
        assert graph.incoming_edges("end")[0].id == "e1"

    def test_add_edge_missing_endpoint(self, start_node):
        graph = GraphModel([start_node])

        with pytest.raises(InvalidEndpointError):
            graph.add_edge(EdgeSpec(id="e1", source="start", target="ghost"))

    def test_add_edge_onto_occupied_handle(self, two_step_graph):
        with pytest.raises(HandleConflictError) as exc_info:
            two_step_graph.add_edge(EdgeSpec(id="dup", source="start", target="s2"))

        assert exc_info.value.edge_id == "e-start-s1"
        assert exc_info.value.direction == "source"

    def test_distinct_handles_do_not_conflict(self, start_node, make_step):
        graph = GraphModel([start_node, make_step("a"), make_step("b")])
        graph = graph.add_edge(EdgeSpec(id="e1", source="start", target="a", source_handle="left"))
        graph = graph.add_edge(EdgeSpec(id="e2", source="start", target="b", source_handle="right"))

        assert len(graph.outgoing_edges("start")) == 2

    def test_remove_edge(self, two_step_graph):
        graph = two_step_graph.remove_edge("e-s1-s2")

        assert not graph.has_edge("e-s1-s2")
        assert graph.edges_at_handle("s1", None, HandleDirection.SOURCE) == []

    def test_remove_missing_edge_is_noop(self, two_step_graph):
        assert two_step_graph.remove_edge("ghost") is two_step_graph

    def test_replace_edge_keeps_order(self, two_step_graph):
        replacement = EdgeSpec(id="e-s1-s2", source="s1", target="end")
        graph = two_step_graph.remove_edge("e-s2-end").replace_edge("e-s1-s2", replacement)

        assert graph.edge_ids == ("e-start-s1", "e-s1-s2")
        assert graph.get_edge("e-s1-s2").target == "end"

    def test_replace_unknown_edge(self, two_step_graph):
        with pytest.raises(EdgeNotFoundError):
            two_step_graph.replace_edge("ghost", EdgeSpec(id="ghost", source="s1", target="s2"))


# ============================================================================
# EXPORT AND DIFF TESTS
# ============================================================================

@pytest.mark.unit
class TestSnapshotExport:
    """Test durable snapshot form and diffs."""

    def test_snapshot_uses_durable_keys(self, scenario_graph):
        snapshot = scenario_graph.to_snapshot()

        step = next(n for n in snapshot["nodes"] if n["id"] == "stepA")
        assert step["type"] == "step-group"
        assert step["data"]["agents"] == ["x", "y"]
        assert "purpose" not in step["data"]
        assert snapshot["edges"][0] == {
            "id": "e1",
            "source": "start",
            "target": "stepA",
            "sourceHandle": None,
            "targetHandle": None,
        }

    def test_diff(self, two_step_graph):
        extra = NodeBuilder.agent("helper").with_id("a1").build()
        changed = (two_step_graph
            .add_node(extra)
            .remove_edge("e-s2-end")
            .update_node_data("s2", purpose="Check"))

        diff = two_step_graph.diff(changed)

        assert diff.added_nodes == {"a1"}
        assert diff.removed_edges == {"e-s2-end"}
        assert diff.changed_nodes == {"s2"}
        assert not diff.is_empty
        assert two_step_graph.diff(two_step_graph).is_empty
