# NOTE: MODIFY TS ONLY WHEN U WANNA CHANGE THE OVERALL PARAMETERS OF THE DATA.

DEFAULT_DATA_PATH = 'data/youth_smoking_drug_data_10000_rows_expanded.csv'

# header names in the survey csv, with the column position used when a header is missing/renamed
COLUMNS = {
    'age_group': ('Age_Group', 1),
    'smoking_prevalence': ('Smoking_Prevalence', 3),
    'drug_experimentation': ('Drug_Experimentation', 4),
    'socioeconomic_status': ('Socioeconomic_Status', 5),
    'peer_influence': ('Peer_Influence', 6),
}

# what a numeric cell turns into when it doesnt parse. rows are never dropped
FIELD_DEFAULTS = {
    'peer_influence': 0,
    'smoking_prevalence': 0.0,
    'drug_experimentation': 0.0,
}

# two people connect when peer influence differs by at most this much
# (and age group + socioeconomic status match exactly)
PEER_INFLUENCE_TOLERANCE = 2

# how many rows each section of the report shows
TOP_N = 10

OUTPUT_DIR = 'outputs'
