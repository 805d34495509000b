"""
Shared fixtures for flow graph tests.
"""

import itertools
import logging
from typing import Callable, List, Optional

import pytest

from core.flowgraph import (
    ConnectionManager,
    ConnectionSettings,
    FlowGraphSettings,
    GraphBuilder,
    GraphModel,
    NodeBuilder,
    NodeSpec,
    StepMode,
)
from core.flowgraph import config as flowgraph_config
from core.flowgraph.constants import (
    ENV_ALLOW_SELF_LOOPS,
    ENV_LAYOUT_X,
    ENV_LAYOUT_START_Y,
    ENV_LAYOUT_FIRST_STEP_Y,
    ENV_LAYOUT_SPACING_Y,
    ENV_WORKFLOWS_PATH,
    ENV_CLAUDE_ROOT_PATH,
    ENV_LOG_LEVEL,
)
from core.flowgraph.defaults import DEFAULT_LOGGER_NAME


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Isolate every test from flow graph environment variables and cached settings."""
    for name in (
        ENV_ALLOW_SELF_LOOPS,
        ENV_LAYOUT_X,
        ENV_LAYOUT_START_Y,
        ENV_LAYOUT_FIRST_STEP_Y,
        ENV_LAYOUT_SPACING_Y,
        ENV_WORKFLOWS_PATH,
        ENV_CLAUDE_ROOT_PATH,
        ENV_LOG_LEVEL,
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(flowgraph_config, "_settings", None)
    logger = logging.getLogger(DEFAULT_LOGGER_NAME)
    level = logger.level
    yield
    logger.setLevel(level)


@pytest.fixture
def make_step() -> Callable[..., NodeSpec]:
    """Factory for step group nodes."""
    def _make(
        node_id: str,
        title: Optional[str] = None,
        agents: Optional[List[str]] = None,
        mode: StepMode = StepMode.SEQUENTIAL,
        purpose: Optional[str] = None,
    ) -> NodeSpec:
        return (NodeBuilder.step_group(title or node_id)
            .with_id(node_id)
            .with_mode(mode)
            .with_purpose(purpose)
            .with_agents(agents or [])
            .build())
    return _make


@pytest.fixture
def start_node() -> NodeSpec:
    return NodeBuilder.start().with_id("start").build()


@pytest.fixture
def end_node() -> NodeSpec:
    return NodeBuilder.end().with_id("end").build()


@pytest.fixture
def scenario_graph(start_node, end_node, make_step) -> GraphModel:
    """start --(e1)--> stepA(sequential, agents=[x, y]) --(e2)--> end"""
    return (GraphBuilder()
        .add_node(start_node)
        .add_node(make_step("stepA", agents=["x", "y"]))
        .add_node(end_node)
        .connect("start", "stepA", edge_id="e1")
        .connect("stepA", "end", edge_id="e2")
        .build())


@pytest.fixture
def two_step_graph(start_node, end_node, make_step) -> GraphModel:
    """start -> s1 -> s2 -> end with edge IDs ``e-<source>-<target>``."""
    return (GraphBuilder()
        .add_node(start_node)
        .add_node(make_step("s1", title="Plan", agents=["planner"], purpose="Plan the change"))
        .add_node(make_step("s2", title="Review", agents=["reviewer", "tester"], mode=StepMode.PARALLEL))
        .add_node(end_node)
        .chain("start", "s1", "s2", "end")
        .build())


@pytest.fixture
def edge_id_factory() -> Callable[[], str]:
    """Deterministic edge IDs: new-1, new-2, ..."""
    counter = itertools.count(1)
    return lambda: f"new-{next(counter)}"


@pytest.fixture
def manager(edge_id_factory) -> ConnectionManager:
    return ConnectionManager(ConnectionSettings(), id_factory=edge_id_factory)


@pytest.fixture
def settings() -> FlowGraphSettings:
    return FlowGraphSettings()
