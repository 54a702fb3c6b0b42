"""Serialising layout results for renderers."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pydot

from .config import VIEWBOX_PADDING
from .models import Bounds, Connection, LayoutNode, LayoutResult

logger = logging.getLogger(__name__)

# Graphviz measures node sizes in inches and positions in points
POINTS_PER_INCH = 72.0

FILL_COLORS = {"male": "lightblue", "female": "lightpink"}


def node_to_dict(node: LayoutNode) -> dict[str, Any]:
    return {
        "person": node.person.to_dict(),
        "x": node.x,
        "y": node.y,
        "width": node.width,
        "height": node.height,
        "generation": node.generation,
        "isSpouse": node.is_spouse,
        "isChild": node.is_child,
        "isParent": node.is_parent,
        "isFocused": node.is_focused,
    }


def connection_to_dict(connection: Connection) -> dict[str, Any]:
    return {
        "id": connection.id,
        "type": connection.type,
        "from": {"x": connection.from_point.x, "y": connection.from_point.y},
        "to": {"x": connection.to_point.x, "y": connection.to_point.y},
        "fromId": connection.from_id,
        "toId": connection.to_id,
    }


def bounds_to_dict(bounds: Bounds) -> dict[str, float]:
    return {
        "minX": bounds.min_x,
        "maxX": bounds.max_x,
        "minY": bounds.min_y,
        "maxY": bounds.max_y,
        "width": bounds.width,
        "height": bounds.height,
    }


def layout_to_dict(result: LayoutResult) -> dict[str, Any]:
    """Convert a layout to the JSON shape the SVG renderer consumes."""
    return {
        "nodes": [node_to_dict(n) for n in result.nodes],
        "connections": [connection_to_dict(c) for c in result.connections],
        "bounds": bounds_to_dict(result.bounds),
        "focusedNode": node_to_dict(result.focused_node) if result.focused_node else None,
    }


def compute_viewbox(
    bounds: Bounds, padding: float = VIEWBOX_PADDING
) -> tuple[float, float, float, float]:
    """SVG viewBox (min_x, min_y, width, height) enclosing `bounds` plus `padding`."""
    return (
        bounds.min_x - padding,
        bounds.min_y - padding,
        bounds.width + padding * 2,
        bounds.height + padding * 2,
    )


def _dot_id(person_id: str) -> str:
    # Quote ids so Graphviz accepts arbitrary characters
    return json.dumps(person_id)


def layout_to_dot(result: LayoutResult) -> pydot.Dot:
    """
    Build a Graphviz graph with every node pinned at its computed position.

    Coordinates are passed through as points with y flipped (Graphviz y grows
    upwards), so `neato -n` reproduces the layout without moving anything.
    """
    P = pydot.Dot(graph_type="digraph")
    P.set("splines", "ortho")
    P.set("outputorder", "edgesfirst")

    for node in result.nodes:
        person = node.person
        label = person.name
        if person.birth_year is not None:
            label = f"{label}\n{person.birth_year}"
        P.add_node(
            pydot.Node(
                _dot_id(person.id),
                label=json.dumps(label),
                shape="box",
                style="rounded,filled",
                fillcolor=FILL_COLORS.get(person.gender, "lightgray"),
                penwidth="3" if node.is_focused else "1",
                width=f"{node.width / POINTS_PER_INCH:.4f}",
                height=f"{node.height / POINTS_PER_INCH:.4f}",
                fixedsize="true",
                pos=f'"{node.x:g},{0 - node.y:g}!"',
                fontsize="10",
            )
        )

    for connection in result.connections:
        if connection.type == "spouse":
            P.add_edge(
                pydot.Edge(
                    _dot_id(connection.from_id),
                    _dot_id(connection.to_id),
                    dir="none",
                    color="darkgray",
                )
            )
        else:
            P.add_edge(
                pydot.Edge(
                    _dot_id(connection.from_id),
                    _dot_id(connection.to_id),
                    color="darkgray",
                )
            )

    return P


def write_layout(result: LayoutResult, output_path: Path):
    """Write a layout as JSON (.json) or DOT source (.dot, .gv)."""
    output_path = Path(output_path)
    ext = output_path.suffix.lower().lstrip(".")

    if ext == "json":
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(layout_to_dict(result), f, indent=2)
    elif ext in ("dot", "gv"):
        output_path.write_text(layout_to_dot(result).to_string(), encoding="utf-8")
    else:
        raise ValueError(f"Unsupported layout output format: .{ext}")

    logger.info("Layout written to %s", output_path)
