from __future__ import annotations

import networkx as nx
import pandas as pd
import plotly.graph_objects as go


def build_graph(pairs: pd.DataFrame, weight: str = "n") -> nx.Graph:
    """Undirected graph from an ['item1', 'item2', <weight>] pair table."""
    graph = nx.Graph()
    for a, b, w in pairs[["item1", "item2", weight]].itertuples(index=False):
        graph.add_edge(a, b, weight=float(w))
    # Remove zero-degree nodes to keep it clean
    graph.remove_nodes_from(list(nx.isolates(graph)))
    return graph


def network_figure(
    graph: nx.Graph, title: str = "", seed: int = 2016, k: float = 0.7
) -> go.Figure:
    pos = nx.spring_layout(graph, seed=seed, k=k) if len(graph) else {}

    weights = [d.get("weight", 1.0) for _, _, d in graph.edges(data=True)]
    top = max(weights) if weights else 1.0

    # one trace per edge so line width can follow the weight
    edge_traces = []
    for a, b, d in graph.edges(data=True):
        x0, y0 = pos[a]
        x1, y1 = pos[b]
        edge_traces.append(
            go.Scatter(
                x=[x0, x1, None],
                y=[y0, y1, None],
                mode="lines",
                line=dict(width=0.5 + 4.5 * d.get("weight", 1.0) / top, color="#94A3B8"),
                hoverinfo="text",
                text=f"{a} - {b}: {d.get('weight', 1.0):.3g}",
            )
        )

    nodes = list(graph.nodes())
    node_trace = go.Scatter(
        x=[pos[n][0] for n in nodes],
        y=[pos[n][1] for n in nodes],
        mode="markers+text",
        text=[str(n) for n in nodes],
        textposition="top center",
        hoverinfo="text",
        marker=dict(color="darkred", size=10, line=dict(color="#FFFFFF", width=1)),
    )

    return go.Figure(
        data=[*edge_traces, node_trace],
        layout=go.Layout(
            showlegend=False,
            hovermode="closest",
            margin=dict(l=10, r=10, t=60, b=10),
            title={"text": title, "x": 0.5, "xanchor": "center"},
            xaxis=dict(visible=False),
            yaxis=dict(visible=False),
        ),
    )
