import logging
from collections import defaultdict

import networkx as nx # pyright: ignore[reportMissingModuleSource]

from peergraph.constants import PEER_INFLUENCE_TOLERANCE
from peergraph.records import should_connect, bucket_key

logger = logging.getLogger(__name__)

# both builders return (G, node_map) where node_map[record index] = node handle.
# handles happen to be 0..N-1 (nodes get added in record order) but nothing
# downstream should assume that, always go through node_map.


def add_person_nodes(people):

    G = nx.Graph()
    node_map = {}

    for index, _ in enumerate(people):
        node = G.number_of_nodes()
        G.add_node(node)
        node_map[index] = node

    return G, node_map


def create_graph(people, tolerance=PEER_INFLUENCE_TOLERANCE):
    """
    Plain pairwise scan: every unordered pair (i, j) with i < j is checked once.
    O(N^2) predicate calls, fine for survey sized data (~10k rows).
    """
    G, node_map = add_person_nodes(people)

    for i in range(len(people)):
        for j in range(i + 1, len(people)):
            if should_connect(people[i], people[j], tolerance):
                G.add_edge(node_map[i], node_map[j])

    logger.info("built similarity graph: %d nodes, %d edges",
                G.number_of_nodes(), G.number_of_edges())
    return G, node_map


def create_graph_bucketed(people, tolerance=PEER_INFLUENCE_TOLERANCE):
    """
    Same edges as create_graph, just faster.

    Only people with the same (age_group, socioeconomic_status) can connect, so
    group them first. inside a bucket sort by peer influence and walk forward
    until the gap gets bigger than tolerance.
    """
    G, node_map = add_person_nodes(people)

    buckets = defaultdict(list)
    for index, person in enumerate(people):
        buckets[bucket_key(person)].append(index)

    for members in buckets.values():
        members.sort(key=lambda idx: (people[idx].peer_influence, idx))

        for a, i in enumerate(members):
            for j in members[a + 1:]:
                if people[j].peer_influence - people[i].peer_influence > tolerance:
                    break
                G.add_edge(node_map[i], node_map[j])

    logger.info("built similarity graph from %d buckets: %d nodes, %d edges",
                len(buckets), G.number_of_nodes(), G.number_of_edges())
    return G, node_map


def check_index_map(G, node_map, n_records):

    # a broken map means the builder is buggy, not the data. blow up loudly

    if set(node_map) != set(range(n_records)):
        raise ValueError(f"index map covers {len(node_map)} indices, expected 0..{n_records - 1}")

    handles = list(node_map.values())
    if len(set(handles)) != len(handles):
        raise ValueError("index map is not one-to-one: some records share a node")

    if set(handles) != set(G.nodes()):
        raise ValueError("index map and graph disagree on the node set")
