import json
import os

import pandas as pd
import pytest

from peergraph.process_data import (
    main,
    print_summary,
    rank_behavior,
    rank_degree_distribution,
    rank_distance_2,
    run_pipeline,
    save_outputs,
)


def test_pipeline_results(survey_csv):
    result = run_pipeline(survey_csv)

    assert result['degree_distribution'] == {0: 1, 1: 2, 2: 3}
    assert result['distance_2'] == {0: 0, 1: 0, 2: 0, 3: 2, 4: 2, 5: 2}

    behavior = result['behavior_by_degree']
    assert behavior[0] == (40.0, 10.0)
    assert behavior[1] == (27.5, 32.5)
    assert behavior[2] == pytest.approx((50.0 / 3, 22.0))


def test_bucketed_pipeline_gives_same_answers(survey_csv):
    plain = run_pipeline(survey_csv)
    bucketed = run_pipeline(survey_csv, bucketed=True)

    for key in ('degree_distribution', 'distance_2', 'behavior_by_degree'):
        assert plain[key] == bucketed[key]


def test_repeated_runs_are_identical(survey_csv):
    first = run_pipeline(survey_csv)
    second = run_pipeline(survey_csv)

    for key in ('degree_distribution', 'distance_2', 'behavior_by_degree'):
        assert first[key] == second[key]
    assert rank_distance_2(first['distance_2']) == rank_distance_2(second['distance_2'])


def test_rankings_are_explicit():
    assert rank_degree_distribution({0: 1, 1: 2, 2: 3, 5: 2}) == [(2, 3), (1, 2), (5, 2), (0, 1)]
    assert rank_distance_2({4: 2, 3: 2, 0: 5}) == [(0, 5), (3, 2), (4, 2)]
    assert [d for d, _ in rank_behavior({2: (16.6, 22.0), 0: (40.0, 10.0), 1: (27.5, 32.5)})] == [0, 1, 2]


def test_print_summary(survey_csv, capsys):
    print_summary(run_pipeline(survey_csv), top=2)
    out = capsys.readouterr().out

    assert "People: 6" in out
    assert "Connections: 4" in out
    assert "Degree Distribution (Top 2 Degrees):\nDegree 2: 3\nDegree 1: 2\n" in out
    assert "Node 3: 2 distance-2 neighbors" in out
    assert "Node 5: 2 distance-2 neighbors" not in out
    assert "Degree 0: Avg Smoking Prevalence = 40.00, Avg Drug Experimentation = 10.00" in out


def test_save_outputs(survey_csv, tmp_path):
    out_dir = tmp_path / 'out'
    summary = save_outputs(run_pipeline(survey_csv), str(out_dir))

    degree_df = pd.read_csv(out_dir / 'degree_distribution.csv')
    assert list(degree_df['degree']) == [0, 1, 2]
    assert degree_df['count'].sum() == 6

    d2_df = pd.read_csv(out_dir / 'distance_2_neighbors.csv')
    assert len(d2_df) == 6
    assert list(d2_df['index'][:3]) == [3, 4, 5]

    behavior_df = pd.read_csv(out_dir / 'behavior_by_degree.csv')
    assert behavior_df.loc[behavior_df['degree'] == 1, 'avg_smoking_prevalence'].item() == 27.5

    with open(out_dir / 'summary.json') as f:
        saved = json.load(f)
    assert saved == summary
    assert saved['nodes'] == 6 and saved['edges'] == 4


def test_main_cli(survey_csv, tmp_path, capsys):
    out_dir = tmp_path / 'cli'
    result = main([survey_csv, '--top', '3', '--bucketed', '--output-dir', str(out_dir)])

    assert result['graph'].number_of_edges() == 4
    assert "Top 3 Nodes with the Most Distance-2 Neighbors" in capsys.readouterr().out
    assert os.path.exists(out_dir / 'summary.json')


def test_main_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        main([str(tmp_path / 'missing.csv')])
