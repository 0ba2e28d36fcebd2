# graph-only stats. nothing in here looks at the survey records,
# so it runs on any undirected graph u throw at it.

import logging
from collections import Counter

import numpy as np # pyright: ignore[reportMissingImports]

logger = logging.getLogger(__name__)


def compute_degree_distribution(G) -> dict:

    # degree -> how many nodes have it. isolated people land in the 0 bucket,
    # so the counts always add up to G.number_of_nodes()

    distribution = Counter(degree for _, degree in G.degree())
    return dict(distribution)


def degree_summary(G) -> dict:

    degrees = np.array([degree for _, degree in G.degree()], dtype=int)

    if degrees.size == 0:
        return {'min': 0, 'max': 0, 'avg': 0.0, 'std': 0.0, 'isolated': 0}

    return {
        'min': int(degrees.min()),
        'max': int(degrees.max()),
        'avg': float(degrees.mean()),
        'std': float(degrees.std()),
        'isolated': int((degrees == 0).sum()),
    }


def two_hop_set(G, node, exclude_direct=False) -> set:
    """
    Nodes w with some u such that node-u and u-w are both edges, minus node itself.

    Direct neighbours ARE kept if they can also be reached through another
    neighbour (in a triangle a-b-c, b is two hops from a via c). pass
    exclude_direct=True for the strict "exactly distance 2" reading instead.
    """
    reached = set()

    for neighbor in G.neighbors(node):
        for neighbor_of_neighbor in G.neighbors(neighbor):
            if neighbor_of_neighbor != node:
                reached.add(neighbor_of_neighbor)

    if exclude_direct:
        reached.difference_update(G.neighbors(node))

    return reached


def distance_2_sets(G, exclude_direct=False) -> dict:
    return {node: two_hop_set(G, node, exclude_direct) for node in G.nodes()}


def compute_distance_2_neighbors(G, exclude_direct=False) -> dict:

    # set per node, not a counter: someone reachable through 3 different friends counts once

    counts = {node: len(two_hop_set(G, node, exclude_direct)) for node in G.nodes()}
    logger.info("computed distance-2 neighbour counts for %d nodes", len(counts))
    return counts
