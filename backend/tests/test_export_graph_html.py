"""Tests for the standalone interactive HTML page."""

import json
import re

from conftest import FakeEngine, make_employee

from org_graph.services.export_graph_html import generate_graph_html
from org_graph.services.graph_view import GraphView, GraphViewOptions
from org_graph.services.grouping import CATEGORY10, GroupMode
from org_graph.services.image_retriever import ImageRetriever
from org_graph.services.scene import Container
from org_graph.services.view_hooks import DisplaySlots, StaticControls


def _rendered_view(employees, options=None, mode=GroupMode.NONE):
    engine = FakeEngine(positions=[(100.0 + 50 * i, 200.0) for i in range(len(employees))])
    view = GraphView(
        Container(),
        image_retriever=ImageRetriever("https://photos.example.com/{email}.jpg"),
        controls=StaticControls.for_mode(mode),
        display=DisplaySlots(),
        options=options or GraphViewOptions.embedded(),
        engine_factory=lambda: engine,
    )
    view.render(employees)
    view.run(1)
    return view


def _json_block(page: str, block_id: str):
    match = re.search(
        rf'<script id="{block_id}" type="application/json">(.*?)</script>', page, re.S
    )
    assert match, block_id
    return json.loads(match.group(1))


def test_page_contains_scene_and_controls(org_employees):
    page = generate_graph_html(_rendered_view(org_employees))
    assert page.startswith("<!DOCTYPE html>")
    assert page.count('class="node"') == 5
    assert 'id="js-group-by-department"' in page
    assert 'id="js-search"' in page
    assert 'id="js-information-email-link"' in page


def test_grouping_data_for_every_mode(org_employees):
    page = generate_graph_html(_rendered_view(org_employees, mode=GroupMode.LOCATION))
    grouping = _json_block(page, "og-grouping")
    assert set(grouping) == {"none", "department", "location"}
    assert grouping["department"]["colors"][:2] == [CATEGORY10[0], CATEGORY10[1]]
    assert [e["group"] for e in grouping["location"]["legend"]] == [
        " CA",
        "Portland, OR",
        "Seattle, WA",
    ]
    assert 'id="js-group-by-location" checked' in page
    assert _json_block(page, "og-config")["groupMode"] == "location"


def test_node_data_embedded_variant(org_employees):
    page = generate_graph_html(_rendered_view(org_employees))
    nodes = _json_block(page, "og-nodes")
    assert len(nodes) == 5
    bob = nodes[1]
    assert bob["search"] == [
        "Bob Jones",
        "VP Engineering",
        "Engineering",
        "555-0101",
        "bob@example.com",
    ]
    assert bob["detail"]["telephone_number"] == "555-0101"
    assert bob["detail"]["picture_url"] == "https://photos.example.com/bob@example.com.jpg"
    config = _json_block(page, "og-config")
    assert config["trigger"] == "click"
    assert config["showPhotos"] is True


def test_node_data_standalone_variant(org_employees):
    view = _rendered_view(org_employees, options=GraphViewOptions.standalone())
    page = generate_graph_html(view)
    bob = _json_block(page, "og-nodes")[1]
    assert "555-0201" in bob["search"]
    assert bob["detail"]["mobile_number"] == "Mobile: 555-0201"
    assert bob["detail"]["picture_visible"] is False
    assert _json_block(page, "og-config")["trigger"] == "mouseover"


def test_search_state_carried_over(org_employees):
    view = _rendered_view(org_employees)
    view.search("executive")
    page = generate_graph_html(view)
    assert '<span id="js-search-record-count">(1 matches)</span>' in page
    assert 'value="executive"' in page
    assert _json_block(page, "og-config")["selected"] == 0


def test_text_is_escaped():
    employees = [
        make_employee(1, displayName="<script>alert(1)</script>", department="R&D"),
    ]
    view = _rendered_view(employees, mode=GroupMode.DEPARTMENT)
    view.search('"><b>')
    page = generate_graph_html(view, title="Org <Chart>")
    assert "<script>alert(1)</script>" not in page
    assert "<title>Org &lt;Chart&gt;</title>" in page
    assert 'value="&quot;&gt;&lt;b&gt;"' in page
    assert "R&amp;D" in page
