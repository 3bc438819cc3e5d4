from org_graph.services.scene import Container


def test_append_and_select():
    root = Container()
    svg = root.append("svg", width=10)
    g = svg.append("g", datum=0).classed("node")
    g.append("circle", datum=0, r=5.0)
    assert root.select_all("svg") == [svg]
    assert root.select_all(cls="node") == [g]
    assert len(root.select_all("circle")) == 1


def test_classed_toggles():
    el = Container().append("circle")
    el.classed("highlight")
    assert "highlight" in el.classes
    el.classed("highlight", False)
    assert "highlight" not in el.classes


def test_dispatch_passes_datum():
    seen = []
    el = Container().append("g", datum=3).on("click", seen.append)
    assert el.dispatch("click") is True
    assert el.dispatch("mouseover") is False
    assert seen == [3]


def test_remove_where():
    svg = Container().append("svg")
    svg.append("g").classed("legend-ordinal")
    svg.append("g").classed("node")
    svg.remove_where(lambda el: "legend-ordinal" in el.classes)
    assert [c.classes for c in svg.children] == [{"node"}]


def test_markup_escapes_and_formats():
    svg = Container().append("svg", width=1000)
    text = svg.append("text", datum=1, x=12.5, y=3.0)
    text.text = "<b>"
    text.style["fill"] = "#fff"
    assert svg.to_markup() == (
        '<svg width="1000"><text x="12.5" y="3" data-index="1" style="fill:#fff">'
        "&lt;b&gt;</text></svg>"
    )
