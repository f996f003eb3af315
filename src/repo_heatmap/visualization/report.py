"""Render the heatmap graph as a self-contained HTML page.

The page embeds the graph and summary stats as a JSON blob inside a
``<script>`` tag and draws them with cytoscape.js using a force-directed
(``cose``) layout. The same HTML is served by the dashboard server and
written by ``repo-heatmap --output``.
"""

import html
import json
from pathlib import Path
from typing import Any, Union

from ..graph.colors import HEATMAP_STOPS
from ..graph.models import GraphData

CYTOSCAPE_URL = "https://unpkg.com/cytoscape@3.26.0/dist/cytoscape.min.js"

LEGEND_LABELS = ("Low", "Medium-Low", "Medium", "Medium-High", "High")


def render_html(graph: GraphData, stats: dict[str, Any], title: str = "Repository Heatmap") -> str:
    """Return the full HTML document for *graph* and *stats*."""
    data_json = json.dumps({"graph": graph.to_dict(), "stats": stats})
    # A literal "</script>" inside a path must not close the data block.
    data_json = data_json.replace("</", "<\\/")
    return _build_html(data_json, _legend_html(), html.escape(title))


def write_report(
    graph: GraphData,
    stats: dict[str, Any],
    output_path: Union[str, Path] = "repo-heatmap.html",
) -> str:
    """Write the HTML page to *output_path* and return its absolute path."""
    out = Path(output_path).resolve()
    out.write_text(render_html(graph, stats), encoding="utf-8")
    return str(out)


# ── Private helpers ──────────────────────────────────────────────────


def _legend_html() -> str:
    items = []
    for (r, g, b), label in zip(HEATMAP_STOPS, LEGEND_LABELS):
        items.append(
            f'<div class="legend-item"><div class="legend-color" '
            f'style="background: rgb({r}, {g}, {b})"></div><span>{label}</span></div>'
        )
    return "\n".join(items)


def _build_html(data_json: str, legend: str, title: str) -> str:
    # f-string: {{ / }} produce literal braces in the CSS and JS.
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{title}</title>
<script src="{CYTOSCAPE_URL}"></script>
<style>
* {{ margin: 0; padding: 0; box-sizing: border-box; }}
body {{ font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif; background: #0f172a; color: #e2e8f0; overflow: hidden; }}
#header {{ position: fixed; top: 0; left: 0; right: 0; padding: 16px 24px; background: rgba(15, 23, 42, 0.9); border-bottom: 1px solid #1e293b; z-index: 100; display: flex; justify-content: space-between; align-items: center; }}
#header h1 {{ font-size: 18px; font-weight: 600; color: #f8fafc; }}
#stats {{ display: flex; gap: 24px; font-size: 13px; color: #94a3b8; }}
#stats span {{ color: #f8fafc; font-weight: 500; }}
#cy {{ width: 100vw; height: 100vh; }}
#legend {{ position: fixed; bottom: 24px; right: 24px; background: rgba(15, 23, 42, 0.9); border: 1px solid #1e293b; border-radius: 8px; padding: 16px; z-index: 100; }}
#legend h3 {{ font-size: 12px; font-weight: 600; color: #94a3b8; margin-bottom: 12px; text-transform: uppercase; letter-spacing: 0.5px; }}
.legend-item {{ display: flex; align-items: center; gap: 8px; margin-bottom: 8px; font-size: 12px; color: #cbd5e1; }}
.legend-color {{ width: 16px; height: 16px; border-radius: 3px; }}
#tooltip {{ position: fixed; background: rgba(15, 23, 42, 0.95); border: 1px solid #334155; border-radius: 6px; padding: 12px; pointer-events: none; opacity: 0; transition: opacity 0.15s; z-index: 200; max-width: 280px; }}
#tooltip.visible {{ opacity: 1; }}
#tooltip h4 {{ font-size: 13px; font-weight: 600; color: #f8fafc; margin-bottom: 4px; word-break: break-all; }}
#tooltip p {{ font-size: 12px; color: #94a3b8; margin: 2px 0; }}
#controls {{ position: fixed; bottom: 24px; left: 24px; display: flex; gap: 8px; z-index: 100; }}
button {{ background: #1e293b; border: 1px solid #334155; color: #e2e8f0; padding: 8px 16px; border-radius: 6px; cursor: pointer; font-size: 13px; }}
button:hover {{ background: #334155; }}
#search {{ position: fixed; top: 80px; right: 24px; z-index: 100; }}
#search input {{ background: rgba(15, 23, 42, 0.9); border: 1px solid #334155; border-radius: 6px; padding: 8px 12px; color: #e2e8f0; font-size: 13px; width: 200px; outline: none; }}
#search input:focus {{ border-color: #3b82f6; }}
</style>
</head>
<body>
<div id="header">
  <h1>{title}</h1>
  <div id="stats">
    <div>Files: <span id="stat-files"></span></div>
    <div>Total Changes: <span id="stat-changes"></span></div>
    <div>Period: <span id="stat-period"></span></div>
  </div>
</div>
<div id="search"><input type="text" id="searchInput" placeholder="Search files..."></div>
<div id="cy"></div>
<div id="legend">
<h3>Change Intensity</h3>
{legend}
</div>
<div id="controls">
  <button onclick="fitGraph()">Fit</button>
  <button onclick="resetLayout()">Reset Layout</button>
  <button onclick="toggleLabels()">Toggle Labels</button>
</div>
<div id="tooltip"></div>
<script id="heatmap-data" type="application/json">{data_json}</script>
<script>
const DATA = JSON.parse(document.getElementById("heatmap-data").textContent);
const stats = DATA.stats;
document.getElementById("stat-files").textContent = stats.totalFiles;
document.getElementById("stat-changes").textContent = stats.totalChanges.toLocaleString();
document.getElementById("stat-period").textContent =
  new Date(stats.dateRange.from).toLocaleDateString() + " - " + new Date(stats.dateRange.to).toLocaleDateString();

const LAYOUT = {{
  name: "cose", padding: 50, nodeRepulsion: 8000, idealEdgeLength: 100, nodeOverlap: 20,
  componentSpacing: 100, nestingFactor: 5, gravity: 10, numIter: 1000, initialTemp: 200,
  coolingFactor: 0.95, minTemp: 1.0
}};
let showLabels = true;

const cy = cytoscape({{
  container: document.getElementById("cy"),
  elements: [
    ...DATA.graph.nodes.map(n => ({{ data: {{ id: n.id, label: n.label, changes: n.changes, kind: n.kind, size: n.visualSize, color: n.colorValue }} }})),
    ...DATA.graph.edges.map(e => ({{ data: {{ source: e.source, target: e.target }} }}))
  ],
  style: [
    {{ selector: "node", style: {{
      "background-color": "data(color)", "width": "data(size)", "height": "data(size)",
      "label": "data(label)", "font-size": "10px", "text-valign": "bottom", "text-halign": "center",
      "color": "#94a3b8", "text-background-color": "#0f172a", "text-background-opacity": 0.8,
      "text-background-padding": "2px", "text-background-shape": "roundrectangle",
      "border-width": 2, "border-color": "#1e293b" }} }},
    {{ selector: 'node[kind="directory"]', style: {{ "shape": "round-rectangle", "border-width": 3, "border-color": "#334155" }} }},
    {{ selector: 'node[kind="file"]', style: {{ "shape": "ellipse" }} }},
    {{ selector: "edge", style: {{ "width": 1, "line-color": "#334155", "target-arrow-shape": "none", "curve-style": "bezier" }} }},
    {{ selector: ".highlighted", style: {{ "border-width": 4, "border-color": "#fbbf24", "z-index": 999 }} }},
    {{ selector: ".dimmed", style: {{ "opacity": 0.2 }} }}
  ],
  layout: LAYOUT
}});

const tooltip = document.getElementById("tooltip");
function escapeHtml(s) {{
  return String(s).replace(/[&<>"']/g, c => ({{ "&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;", "'": "&#39;" }}[c]));
}}
cy.on("mouseover", "node", evt => {{
  const d = evt.target.data();
  tooltip.innerHTML = "<h4>" + escapeHtml(d.id) + "</h4><p>Type: " + d.kind + "</p><p>Changes: " + d.changes.toLocaleString() + "</p>";
  tooltip.classList.add("visible");
}});
cy.on("mousemove", evt => {{
  if (!evt.originalEvent) return;
  tooltip.style.left = (evt.originalEvent.clientX + 15) + "px";
  tooltip.style.top = (evt.originalEvent.clientY + 15) + "px";
}});
cy.on("mouseout", "node", () => tooltip.classList.remove("visible"));
cy.on("tap", "node", evt => {{
  const hood = evt.target.neighborhood().add(evt.target);
  cy.elements().addClass("dimmed");
  hood.removeClass("dimmed").addClass("highlighted");
  setTimeout(() => cy.elements().removeClass("dimmed highlighted"), 2000);
}});
cy.on("tap", evt => {{ if (evt.target === cy) cy.elements().removeClass("dimmed highlighted"); }});

function fitGraph() {{ cy.fit(50); }}
function resetLayout() {{ cy.layout(Object.assign({{ animate: true, animationDuration: 500 }}, LAYOUT)).run(); }}
function toggleLabels() {{
  showLabels = !showLabels;
  cy.style().selector("node").style("label", showLabels ? "data(label)" : "").update();
}}

document.getElementById("searchInput").addEventListener("input", e => {{
  const q = e.target.value.toLowerCase();
  if (q === "") {{ cy.elements().removeClass("dimmed highlighted"); return; }}
  const matches = cy.nodes().filter(n => n.data("id").toLowerCase().includes(q) || n.data("label").toLowerCase().includes(q));
  cy.elements().addClass("dimmed");
  matches.removeClass("dimmed").addClass("highlighted");
}});

setTimeout(fitGraph, 500);
</script>
</body>
</html>
"""
