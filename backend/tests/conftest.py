import os

import pytest

# Disable rate limiting for tests
os.environ["ORG_GRAPH_NO_RATE_LIMIT"] = "true"
os.environ.pop("ORG_GRAPH_API_TOKEN", None)

from org_graph.models.employee_models import Employee  # noqa: E402


def make_employee(id, manager=None, **fields) -> Employee:
    data = {"id": id, "manager": {"id": manager} if manager is not None else None}
    data.update(fields)
    return Employee.model_validate(data)


@pytest.fixture
def org_employees() -> list[Employee]:
    """Small org: Alice (root) -> Bob -> Carol, Alice -> Dave -> Erin."""
    return [
        make_employee(
            1,
            displayName="Alice Smith",
            jobTitle="CEO",
            department="Executive",
            city="Seattle",
            state="WA",
            telephoneNumber="555-0100",
            email="alice@example.com",
        ),
        make_employee(
            2,
            manager=1,
            displayName="Bob Jones",
            jobTitle="VP Engineering",
            department="Engineering",
            city="Seattle",
            state="WA",
            telephoneNumber="555-0101",
            mobileNumber="555-0201",
            email="bob@example.com",
        ),
        make_employee(
            3,
            manager=2,
            displayName="Carol White",
            jobTitle="Engineer",
            department="Engineering",
            city="Portland",
            state="OR",
            email="carol@example.com",
        ),
        make_employee(
            4,
            manager=1,
            displayName="Dave Brown",
            jobTitle="Sales Lead",
            department="Sales",
            state="CA",
            telephoneNumber="555-0104",
            email="dave@example.com",
        ),
        make_employee(
            5,
            manager=4,
            displayName="Erin Green",
            jobTitle="Sales Rep",
            department="Sales",
            state="CA",
            telephoneNumber="555-0105",
            email="erin@example.com",
        ),
    ]


class FakeEngine:
    """Force engine stand-in that replays fixed positions on every tick."""

    def __init__(self, positions=None):
        self.positions = positions or []
        self.started = None
        self.on_tick = None
        self.ticks = 0

    def start(self, node_count, edges, size, parameters, on_tick):
        self.started = {
            "node_count": node_count,
            "edges": list(edges),
            "size": size,
            "parameters": parameters,
        }
        self.on_tick = on_tick

    def run(self, ticks):
        for _ in range(ticks):
            self.ticks += 1
            self.on_tick(self.positions)


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()
