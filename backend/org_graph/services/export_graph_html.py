"""Generate a self-contained interactive HTML page for a rendered org graph."""

from __future__ import annotations

import html as html_mod
import json

from org_graph.services.graph_view import LEGEND_CELL_HEIGHT, GraphView
from org_graph.services.grouping import GroupMode, regroup
from org_graph.services.search import SEARCH_FIELDS, SEARCH_FIELDS_WITH_MOBILE
from org_graph.services.selection import build_detail_panel


def _html_escape(s: str) -> str:
    return html_mod.escape(s, quote=True)


def _json_block(data: object) -> str:
    return json.dumps(data, ensure_ascii=False).replace("</", "<\\/")


def _build_grouping_data(view: GraphView) -> dict[str, dict]:
    """Colors and legend for every grouping mode, keyed by mode value."""
    result: dict[str, dict] = {}
    for mode in GroupMode:
        grouping = regroup(view.employees, mode)
        result[mode.value] = {
            "colors": grouping.colors,
            "legend": [e.model_dump() for e in grouping.legend],
        }
    return result


def _build_node_data(view: GraphView) -> list[dict]:
    """Searchable fields plus the precomputed detail panel for every node."""
    opts = view.options
    fields = SEARCH_FIELDS_WITH_MOBILE if opts.include_mobile_number else SEARCH_FIELDS
    retriever = view.image_retriever if opts.show_photos else None
    nodes = []
    for employee in view.employees:
        panel = build_detail_panel(
            employee, retriever, include_mobile_number=opts.include_mobile_number
        )
        nodes.append({
            "id": employee.id,
            "search": [getattr(employee, f) or "" for f in fields],
            "detail": panel.model_dump(),
        })
    return nodes


def generate_graph_html(view: GraphView, title: str = "Org Chart") -> str:
    """Render the view's current scene plus controls, search box and detail panel."""
    response = view.to_response()
    opts = view.options

    config = {
        "trigger": "mouseover" if opts.selection_trigger == "hover" else "click",
        "showLegend": opts.show_legend,
        "showPhotos": opts.show_photos,
        "groupMode": response.group_mode,
        "selected": next((n.index for n in response.nodes if n.selected), None),
    }
    config_json = _json_block(config)
    nodes_json = _json_block(_build_node_data(view))
    grouping_json = _json_block(_build_grouping_data(view))

    dept_checked = " checked" if response.group_mode == GroupMode.DEPARTMENT.value else ""
    loc_checked = " checked" if response.group_mode == GroupMode.LOCATION.value else ""
    query_value = _html_escape(response.query)
    count_text = _html_escape(response.match_count_text)
    svg_markup = view.to_svg()

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{_html_escape(title)}</title>
<style>
  body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif; margin: 0; display: flex; }}
  .og-main {{ flex: 1; padding: 12px; }}
  .og-toolbar {{ display: flex; gap: 16px; align-items: center; margin-bottom: 8px; font-size: 13px; }}
  .og-graph svg {{ width: 100%; height: auto; border: 1px solid #e5e7eb; border-radius: 8px; }}
  line {{ stroke: #9ca3af; stroke-width: 1.5px; }}
  circle {{ stroke: #fff; stroke-width: 2px; cursor: pointer; }}
  circle.highlight {{ stroke: #111827; stroke-width: 4px; }}
  circle.search-non-match {{ opacity: 0.15; }}
  .circle-text {{ font-size: 11px; fill: #fff; pointer-events: none; }}
  .circle-image {{ pointer-events: none; clip-path: circle(50%); }}
  .legend-ordinal .label {{ font-size: 12px; fill: #374151; }}
  #js-information-container {{ width: 300px; padding: 16px; background: #f9fafb; border-left: 1px solid #e5e7eb; visibility: hidden; }}
  #js-information-picture {{ width: 96px; height: 96px; border-radius: 50%; object-fit: cover; }}
  #js-information-name {{ font-size: 18px; font-weight: 600; }}
  .og-detail-line {{ font-size: 13px; color: #4b5563; margin: 4px 0; }}
</style>
</head>
<body>
<div class="og-main">
  <div class="og-toolbar" id="js-group-by-container">
    <label><input type="checkbox" id="js-group-by-department"{dept_checked}> Group by department</label>
    <label><input type="checkbox" id="js-group-by-location"{loc_checked}> Group by location</label>
    <input type="search" id="js-search" placeholder="Search" value="{query_value}">
    <span id="js-search-record-count">{count_text}</span>
  </div>
  <div class="og-graph" id="js-graph">{svg_markup}</div>
</div>
<div id="js-information-container">
  <img id="js-information-picture" alt="">
  <div id="js-information-name"></div>
  <div class="og-detail-line" id="js-information-job-title"></div>
  <div class="og-detail-line" id="js-information-department"></div>
  <div class="og-detail-line" id="js-location"></div>
  <div class="og-detail-line" id="js-information-telephone-number"></div>
  <div class="og-detail-line" id="js-information-mobile-number"></div>
  <div class="og-detail-line"><a id="js-information-email-link"></a></div>
</div>
<script id="og-config" type="application/json">{config_json}</script>
<script id="og-nodes" type="application/json">{nodes_json}</script>
<script id="og-grouping" type="application/json">{grouping_json}</script>
<script>
(function() {{
  var config = JSON.parse(document.getElementById('og-config').textContent);
  var nodes = JSON.parse(document.getElementById('og-nodes').textContent);
  var grouping = JSON.parse(document.getElementById('og-grouping').textContent);
  var svgNS = 'http://www.w3.org/2000/svg';
  var svg = document.querySelector('#js-graph svg');

  function circleFor(i) {{
    return svg.querySelector('circle[data-index="' + i + '"]');
  }}

  function setText(id, text) {{
    document.getElementById(id).textContent = text;
  }}

  function select(i) {{
    var d = nodes[i].detail;
    document.getElementById('js-information-container').style.visibility = 'visible';
    svg.querySelectorAll('circle').forEach(function(c) {{ c.classList.remove('highlight'); }});
    circleFor(i).classList.add('highlight');

    var picture = document.getElementById('js-information-picture');
    if (config.showPhotos && d.picture_visible) {{
      picture.src = d.picture_url;
      picture.style.visibility = 'visible';
    }} else {{
      picture.style.visibility = 'hidden';
    }}
    setText('js-information-name', d.name);
    setText('js-information-job-title', d.job_title);
    setText('js-information-department', d.department);
    setText('js-location', d.location);
    setText('js-information-telephone-number', d.telephone_number);
    setText('js-information-mobile-number', d.mobile_number);
    var link = document.getElementById('js-information-email-link');
    link.textContent = d.email;
    link.href = d.email_href;
  }}

  function renderLegend(entries) {{
    var old = svg.querySelector('.legend-ordinal');
    if (old) old.parentNode.removeChild(old);
    if (!config.showLegend) return;
    var legend = document.createElementNS(svgNS, 'g');
    legend.setAttribute('class', 'legend-ordinal');
    legend.setAttribute('transform', 'translate(20, 20)');
    entries.forEach(function(entry, i) {{
      var cell = document.createElementNS(svgNS, 'g');
      cell.setAttribute('class', 'cell');
      cell.setAttribute('transform', 'translate(0, ' + (i * {LEGEND_CELL_HEIGHT}) + ')');
      var rect = document.createElementNS(svgNS, 'rect');
      rect.setAttribute('width', 15);
      rect.setAttribute('height', 15);
      rect.style.fill = entry.color;
      var text = document.createElementNS(svgNS, 'text');
      text.setAttribute('class', 'label');
      text.setAttribute('transform', 'translate(25, 12.5)');
      text.textContent = entry.group;
      cell.appendChild(rect);
      cell.appendChild(text);
      legend.appendChild(cell);
    }});
    svg.appendChild(legend);
  }}

  function updateGrouping() {{
    var mode = 'none';
    if (document.getElementById('js-group-by-department').checked) mode = 'department';
    else if (document.getElementById('js-group-by-location').checked) mode = 'location';
    var g = grouping[mode];
    g.colors.forEach(function(color, i) {{ circleFor(i).style.fill = color; }});
    renderLegend(g.legend);
  }}

  function compile(str) {{
    try {{
      return new RegExp(str, 'i');
    }} catch (e) {{
      return new RegExp(str.replace(/[.*+?^${{}}()|[\\]\\\\]/g, '\\\\$&'), 'i');
    }}
  }}

  function search(str) {{
    var re = str ? compile(str) : null;
    var matches = [];
    nodes.forEach(function(n, i) {{
      var nonMatch = !!re && !n.search.some(function(v) {{ return v && re.test(v); }});
      circleFor(i).classList.toggle('search-non-match', nonMatch);
      if (!nonMatch) matches.push(i);
    }});
    if (matches.length === 1) select(matches[0]);
    setText('js-search-record-count', str ? '(' + matches.length + ' matches)' : '');
  }}

  svg.querySelectorAll('g.node').forEach(function(g) {{
    var i = parseInt(g.getAttribute('data-index'), 10);
    g.addEventListener(config.trigger, function() {{ select(i); }});
  }});
  document.querySelectorAll('#js-group-by-container input[type=checkbox]').forEach(function(x) {{
    x.onclick = updateGrouping;
  }});
  document.getElementById('js-search').addEventListener('input', function(e) {{
    search(e.target.value);
  }});
  if (config.selected !== null) select(config.selected);
}})();
</script>
</body>
</html>
"""
