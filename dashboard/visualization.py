from pyvis.network import Network
from typing import Dict, List, Optional


# categorical palette, handed out to category values in sorted order
PALETTE = [
    '#1a5276', '#e67e22', '#52be80', '#e91e8c',
    '#f4d03f', '#9b59b6', '#e74c3c', '#5dade2',
]

FALLBACK_COLOR = '#9e9e9e'
CENTER_COLOR = '#c0392b'


class GraphViz:
    """
    creates pyvis graphs from dashboard data
    """

    def __init__(self, data_backend):
        self.data = data_backend
        self._color_cache: Dict[str, Dict[str, str]] = {}

    def create_graph(
        self,
        nodes: List[int],
        edges: List[tuple],
        color_by: str = 'age_group',
        size_by: str = 'degree',
        height: str = '700px',
        center: Optional[int] = None,
    ) -> Network:
        """
        create pyvis network from node/edge lists

        nodes: list of record indices
        edges: list of (index, index) pairs
        color_by: 'age_group', 'socioeconomic_status'
        size_by: 'degree', 'fixed'
        """

        net = Network(
            height=height,
            width='100%',
            directed=False,
            notebook=False,
            bgcolor='#ffffff',
            font_color='#333333',
        )

        net.set_options('''
        {
            "physics": {
                "enabled": true,
                "barnesHut": { "gravitationalConstant": -3000, "springLength": 120 }
            },
            "nodes": {
                "font": { "size": 12, "face": "arial" }
            },
            "edges": {
                "smooth": false,
                "color": { "color": "#bbbbbb" }
            },
            "interaction": {
                "dragNodes": true,
                "dragView": true,
                "zoomView": true
            }
        }
        ''')

        for index in nodes:
            node_info = self.data.get_node(index)
            if node_info is None:
                continue

            color = CENTER_COLOR if index == center else self._get_color(node_info, color_by)

            net.add_node(
                index,
                label=str(index),
                title=self._get_title(node_info),
                color=color,
                size=self._get_size(node_info, size_by),
            )

        node_set = {n['id'] for n in net.nodes}
        for u, v in edges:
            if u not in node_set or v not in node_set:
                continue
            net.add_edge(u, v, width=1.0)

        return net

    def _get_color(self, node: dict, color_by: str) -> str:

        if color_by not in ('age_group', 'socioeconomic_status'):
            return FALLBACK_COLOR

        if color_by not in self._color_cache:
            values = sorted({getattr(p, color_by) for p in self.data.people})
            self._color_cache[color_by] = {
                value: PALETTE[i % len(PALETTE)] for i, value in enumerate(values)
            }

        return self._color_cache[color_by].get(node[color_by], FALLBACK_COLOR)

    def _get_size(self, node: dict, size_by: str) -> int:
        if size_by == 'degree':
            return max(10, min(40, 10 + node.get('degree', 0) // 5))
        return 15

    def _get_title(self, node: dict) -> str:
        """hover text - plain text, no html"""
        lines = [
            f"Person {node['index']}",
            f"Age group: {node['age_group']}",
            f"Socioeconomic status: {node['socioeconomic_status']}",
            f"Peer influence: {node['peer_influence']}",
            f"Smoking prevalence: {node['smoking_prevalence']:.2f}",
            f"Drug experimentation: {node['drug_experimentation']:.2f}",
            f"Degree: {node['degree']}",
        ]
        return '\n'.join(lines)

    def create_ego_graph(
        self,
        index: int,
        hops: int = 1,
        color_by: str = 'age_group',
        size_by: str = 'degree',
    ) -> Network:

        subgraph = self.data.get_ego_network(index, hops)
        return self.create_graph(
            subgraph['nodes'],
            subgraph['edges'],
            color_by=color_by,
            size_by=size_by,
            center=index,
        )
