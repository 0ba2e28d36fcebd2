# joins graph degree with the behavioural columns of the survey

import logging
from collections import defaultdict

import pandas as pd

from peergraph.graph_builder import check_index_map

logger = logging.getLogger(__name__)


def analyze_behavior_by_degree(G, people, node_map) -> dict:
    """
    degree -> (avg smoking prevalence, avg drug experimentation)

    a degree only shows up if at least one person has it, so theres no
    empty bucket to divide by. dict order means nothing, sort before showing it.
    """
    check_index_map(G, node_map, len(people))

    totals = defaultdict(lambda: [0.0, 0.0])
    counts = defaultdict(int)

    for index, node in node_map.items():
        degree = G.degree(node)
        person = people[index]

        totals[degree][0] += person.smoking_prevalence
        totals[degree][1] += person.drug_experimentation
        counts[degree] += 1

    behavior_by_degree = {}
    for degree, (smoking_total, drug_total) in totals.items():
        behavior_by_degree[degree] = (smoking_total / counts[degree], drug_total / counts[degree])

    logger.info("behaviour averages computed for %d distinct degrees", len(behavior_by_degree))
    return behavior_by_degree


def behavior_frame(G, people, node_map) -> pd.DataFrame:

    # one row per person, handy for the dashboard + csv export
    check_index_map(G, node_map, len(people))

    rows = []
    for index, node in sorted(node_map.items()):
        person = people[index]
        rows.append({
            'index': index,
            'node': node,
            'degree': G.degree(node),
            'age_group': person.age_group,
            'socioeconomic_status': person.socioeconomic_status,
            'peer_influence': person.peer_influence,
            'smoking_prevalence': person.smoking_prevalence,
            'drug_experimentation': person.drug_experimentation,
        })

    return pd.DataFrame(rows, columns=['index', 'node', 'degree', 'age_group',
                                       'socioeconomic_status', 'peer_influence',
                                       'smoking_prevalence', 'drug_experimentation'])


def behavior_table(behavior_by_degree) -> pd.DataFrame:

    rows = [
        {'degree': degree, 'avg_smoking_prevalence': smoking, 'avg_drug_experimentation': drug}
        for degree, (smoking, drug) in sorted(behavior_by_degree.items())
    ]
    return pd.DataFrame(rows, columns=['degree', 'avg_smoking_prevalence', 'avg_drug_experimentation'])
