import os
import sys

import pandas as pd

# add parent dir to path so we can import peergraph when streamlit runs this folder directly
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from peergraph.data_loader import SurveyLoader
from peergraph.process_data import analyze, rank_distance_2
from peergraph.structural_analysis import degree_summary
from peergraph.behavior_analysis import behavior_frame, behavior_table


class DashboardData:
    """
    runs the pipeline once and hands the dashboard pandas frames
    """

    def __init__(self):
        self.people = []
        self.G = None
        self.node_map = {}
        self.node_to_index = {}
        self.result = {}
        self.fallback_count = 0

    def load(self, filepath: str, bucketed: bool = True):

        # bucketed by default, the dashboard reloads a lot and the edges are identical

        loader = SurveyLoader(filepath)
        loader.load()
        self.fallback_count = loader.fallback_count

        self.result = analyze(loader.people, bucketed=bucketed)
        self.people = self.result['people']
        self.G = self.result['graph']
        self.node_map = self.result['node_map']
        self.node_to_index = {node: index for index, node in self.node_map.items()}

        return self

    def get_full_graph_stats(self) -> dict:

        stats = degree_summary(self.G)
        stats['num_nodes'] = self.G.number_of_nodes()
        stats['num_edges'] = self.G.number_of_edges()
        return stats

    def degree_df(self) -> pd.DataFrame:
        return pd.DataFrame(sorted(self.result['degree_distribution'].items()),
                            columns=['degree', 'count'])

    def distance_2_df(self) -> pd.DataFrame:

        rows = [
            {'index': self.node_to_index[node], 'distance_2_neighbors': count,
             'degree': self.G.degree(node)}
            for node, count in rank_distance_2(self.result['distance_2'])
        ]
        return pd.DataFrame(rows, columns=['index', 'distance_2_neighbors', 'degree'])

    def behavior_df(self) -> pd.DataFrame:
        return behavior_table(self.result['behavior_by_degree'])

    def people_df(self) -> pd.DataFrame:
        return behavior_frame(self.G, self.people, self.node_map)

    def get_node(self, index: int) -> dict:
        """record fields + degree for one person, None if out of range"""
        if index not in self.node_map:
            return None

        person = self.people[index]
        info = person._asdict()
        info['index'] = index
        info['degree'] = self.G.degree(self.node_map[index])
        return info

    def get_ego_network(self, index: int, hops: int = 1) -> dict:
        """
        people within `hops` edges of someone, as record indices
        returns nodes and edges for visualization
        """
        if index not in self.node_map:
            return {'nodes': [], 'edges': [], 'center': index}

        center = self.node_map[index]
        nodes = {center}
        frontier = {center}

        for _ in range(hops):
            new_frontier = set()
            for n in frontier:
                new_frontier.update(self.G.neighbors(n))
            new_frontier -= nodes
            nodes.update(new_frontier)
            frontier = new_frontier

        edges = [
            (self.node_to_index[u], self.node_to_index[v])
            for u, v in self.G.subgraph(nodes).edges()
        ]

        return {
            'nodes': sorted(self.node_to_index[n] for n in nodes),
            'edges': edges,
            'center': index,
        }
