from pathlib import Path

import pytest
import structlog

from sched_debugger.models import NodeInfo, Pod, PodPhase, Resource, Snapshot


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


class RecordingSink:
    """Log sink double that keeps every emitted message."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def info(self, event: str, *args, **kwargs) -> None:
        self.messages.append(event)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def example_snapshot() -> Snapshot:
    node = NodeInfo("n1", Resource.from_resource_list({"cpu": "4"}))
    node.add_pod(
        Pod(
            name="p1",
            namespace="ns1",
            uid="u1",
            phase=PodPhase.RUNNING,
            nominated_node_name="",
            node_name="n1",
            requests=Resource.from_resource_list({"cpu": "2"}),
        )
    )
    return Snapshot({"n1": node})


@pytest.fixture
def example_queue() -> list[Pod]:
    return [
        Pod(
            name="p2",
            namespace="ns2",
            uid="u2",
            phase=PodPhase.PENDING,
            nominated_node_name="n1",
        )
    ]
