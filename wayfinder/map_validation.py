"""Map set validation checks for editor and API quality gates."""

from __future__ import annotations

from typing import Any, Mapping

from wayfinder.global_graph import compose
from wayfinder.map_graph import build_map_graphs


def validate_maps(maps: Mapping[str, Mapping[str, Any]]) -> dict[str, Any]:
    """Report duplicate ids, dangling edges and dead-end gateways across a map set."""
    graphs, build_issues = build_map_graphs(maps)
    global_graph = compose(graphs)

    issues = [issue.to_dict() for issue in build_issues]
    issues.extend(issue.to_dict() for issue in global_graph.issues)

    error_count = sum(1 for issue in issues if issue.get("severity") == "error")
    warning_count = sum(1 for issue in issues if issue.get("severity") == "warning")

    return {
        "ok": error_count == 0,
        "summary": {
            "maps": len(maps),
            "valid_maps": len(graphs),
            "nodes": sum(len(graph.nodes) for graph in graphs.values()),
            "edges": sum(graph.edge_count for graph in graphs.values()),
            "gateways": sum(len(graph.gateways()) for graph in graphs.values()),
            "gateway_links": len(global_graph.gateway_edges()),
            "errors": error_count,
            "warnings": warning_count,
        },
        "issues": issues,
    }
