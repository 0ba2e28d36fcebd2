# main pipeline: load the survey, build the similarity graph, run the three analyses,
# print the report and (optionally) save the tables

import argparse
import json
import logging
import os

import pandas as pd

from peergraph.constants import DEFAULT_DATA_PATH, TOP_N
from peergraph.data_loader import SurveyLoader
from peergraph.graph_builder import create_graph, create_graph_bucketed
from peergraph.structural_analysis import (
    compute_degree_distribution,
    compute_distance_2_neighbors,
    degree_summary,
)
from peergraph.behavior_analysis import analyze_behavior_by_degree, behavior_table

logger = logging.getLogger(__name__)


def analyze(people, bucketed=False) -> dict:

    # the 3 analyses only read G / people / node_map, order between them doesnt matter

    builder = create_graph_bucketed if bucketed else create_graph
    G, node_map = builder(people)

    return {
        'people': people,
        'graph': G,
        'node_map': node_map,
        'degree_distribution': compute_degree_distribution(G),
        'distance_2': compute_distance_2_neighbors(G),
        'behavior_by_degree': analyze_behavior_by_degree(G, people, node_map),
    }


def run_pipeline(data_path=DEFAULT_DATA_PATH, bucketed=False) -> dict:

    loader = SurveyLoader(data_path)
    loader.load()
    result = analyze(loader.people, bucketed=bucketed)
    result['fallback_count'] = loader.fallback_count
    return result


# explicit orderings. ties broken by key so repeated runs print the exact same thing

def rank_degree_distribution(degree_distribution) -> list:
    return sorted(degree_distribution.items(), key=lambda kv: (-kv[1], kv[0]))


def rank_distance_2(distance_2) -> list:
    return sorted(distance_2.items(), key=lambda kv: (-kv[1], kv[0]))


def rank_behavior(behavior_by_degree) -> list:
    # by avg smoking prevalence, highest first
    return sorted(behavior_by_degree.items(), key=lambda kv: (-kv[1][0], kv[0]))


def print_summary(result, top=TOP_N):

    G = result['graph']

    print("\n" + "="*60)
    print("SUMMARY REPORT")
    print("="*60)
    print(f"\nPeople: {G.number_of_nodes()}")
    print(f"Connections: {G.number_of_edges()}")

    print(f"\nDegree Distribution (Top {top} Degrees):")
    for degree, count in rank_degree_distribution(result['degree_distribution'])[:top]:
        print(f"Degree {degree}: {count}")

    print(f"\nTop {top} Nodes with the Most Distance-2 Neighbors:")
    for node, count in rank_distance_2(result['distance_2'])[:top]:
        print(f"Node {node}: {count} distance-2 neighbors")

    print(f"\nBehavioral Analysis by Degree (Top {top} Degrees by Avg Smoking Prevalence):")
    for degree, (smoking_avg, drug_avg) in rank_behavior(result['behavior_by_degree'])[:top]:
        print(f"Degree {degree}: Avg Smoking Prevalence = {smoking_avg:.2f}, "
              f"Avg Drug Experimentation = {drug_avg:.2f}")


def save_outputs(result, output_dir='outputs'):
    """saves the derived tables. the graph itself is never written out"""

    os.makedirs(output_dir, exist_ok=True)

    # 1. degree distribution
    degree_df = pd.DataFrame(sorted(result['degree_distribution'].items()),
                             columns=['degree', 'count'])
    degree_df.to_csv(os.path.join(output_dir, 'degree_distribution.csv'), index=False)
    logger.info("saved degree_distribution.csv")

    # 2. distance-2 counts, node handle + the record index it belongs to
    node_to_index = {node: index for index, node in result['node_map'].items()}
    d2_rows = [
        {'node': node, 'index': node_to_index[node], 'distance_2_neighbors': count}
        for node, count in rank_distance_2(result['distance_2'])
    ]
    pd.DataFrame(d2_rows, columns=['node', 'index', 'distance_2_neighbors']).to_csv(
        os.path.join(output_dir, 'distance_2_neighbors.csv'), index=False)
    logger.info("saved distance_2_neighbors.csv")

    # 3. behaviour by degree
    behavior_table(result['behavior_by_degree']).to_csv(
        os.path.join(output_dir, 'behavior_by_degree.csv'), index=False)
    logger.info("saved behavior_by_degree.csv")

    # 4. headline numbers
    G = result['graph']
    summary = {
        'nodes': G.number_of_nodes(),
        'edges': G.number_of_edges(),
        'degree': degree_summary(G),
        'fallback_cells': result.get('fallback_count', 0),
    }
    with open(os.path.join(output_dir, 'summary.json'), 'w') as f:
        json.dump(summary, f, indent=2)
    logger.info("saved summary.json")

    return summary


def parse_args(argv=None):

    parser = argparse.ArgumentParser(description="peer similarity graph over youth survey data")
    parser.add_argument('data_path', nargs='?', default=DEFAULT_DATA_PATH)
    parser.add_argument('--top', type=int, default=TOP_N, help="rows per report section")
    parser.add_argument('--output-dir', default=None, help="also save the tables here")
    parser.add_argument('--bucketed', action='store_true',
                        help="group by age/ses before comparing (same edges, faster)")
    parser.add_argument('-v', '--verbose', action='store_true')
    return parser.parse_args(argv)


def main(argv=None):

    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    result = run_pipeline(args.data_path, bucketed=args.bucketed)
    print_summary(result, top=args.top)

    if args.output_dir:
        save_outputs(result, args.output_dir)

    return result


if __name__ == "__main__":
    main()
