import logging
import re

import pandas as pd

from peergraph.constants import COLUMNS, FIELD_DEFAULTS
from peergraph.records import Person

logger = logging.getLogger(__name__)

INT_PATTERN = re.compile(r'[+-]?[0-9]+')
INT32_MIN, INT32_MAX = -2**31, 2**31 - 1


def parse_int(raw, default=FIELD_DEFAULTS['peer_influence']):
    # "7" -> 7, but "7.5" / "high" / "" / " 7" / "1_0" -> default.
    # cells are not trimmed and the value has to fit a 32 bit int
    if not isinstance(raw, str) or not INT_PATTERN.fullmatch(raw):
        return default, True

    value = int(raw)
    if not INT32_MIN <= value <= INT32_MAX:
        return default, True
    return value, False


def parse_float(raw, default=FIELD_DEFAULTS['smoking_prevalence']):
    # float() would happily eat padding and "1_0.5", a plain numeric parse doesnt
    if not isinstance(raw, str) or '_' in raw or raw != ''.join(raw.split()):
        return default, True
    try:
        return float(raw), False
    except ValueError:
        return default, True


class SurveyLoader:

    def __init__(self, filepath: str):

        self.filepath = filepath
        self.people = []
        self.fallback_count = 0
        self.fallback_rows = set()

    def load(self):

        # everything comes in as text so a bad cell cant poison the whole column dtype.
        # missing file / broken csv structure raise straight out of pandas, on purpose:
        # either the whole dataset loads or nothing runs

        df = pd.read_csv(self.filepath, dtype=str, keep_default_na=False)
        self.check_row_lengths(df)
        columns = self.resolve_columns(df)

        self.people = []
        self.fallback_count = 0
        self.fallback_rows = set()

        for row_num, row in enumerate(df.itertuples(index=False, name=None)):
            self.people.append(self.parse_row(row_num, row, columns))

        logger.info("loaded %d people from %s", len(self.people), self.filepath)
        if self.fallback_rows:
            logger.warning("%d rows had unparsable numeric fields (%d cells set to defaults)",
                           len(self.fallback_rows), self.fallback_count)

        return self.people

    def check_row_lengths(self, df):

        # pandas pads short rows with NaN instead of complaining. with keep_default_na=False
        # an empty cell stays '', so any NaN left means the row had too few fields

        short = df.isna().any(axis=1)
        if short.any():
            row_num = int(short.to_numpy().nonzero()[0][0])
            # +2: header is line 1, data starts on line 2
            raise ValueError(f"{self.filepath}: line {row_num + 2} has fewer fields "
                             f"than the header ({len(df.columns)})")

    def resolve_columns(self, df) -> dict:

        # prefer header names, fall back to where the columns sit in the original export

        headers = list(df.columns)
        positions = {}
        missing = []

        for field, (name, pos) in COLUMNS.items():
            if name in headers:
                positions[field] = headers.index(name)
            elif pos < len(headers):
                logger.debug("no %r header, using column %d for %s", name, pos, field)
                positions[field] = pos
            else:
                missing.append(name)

        if missing:
            raise ValueError(f"{self.filepath}: missing required columns {missing}")

        return positions

    def parse_row(self, row_num, row, columns) -> Person:

        peer, bad_peer = parse_int(row[columns['peer_influence']],
                                   FIELD_DEFAULTS['peer_influence'])
        smoking, bad_smoking = parse_float(row[columns['smoking_prevalence']],
                                           FIELD_DEFAULTS['smoking_prevalence'])
        drug, bad_drug = parse_float(row[columns['drug_experimentation']],
                                     FIELD_DEFAULTS['drug_experimentation'])

        for field, bad in (('peer_influence', bad_peer),
                           ('smoking_prevalence', bad_smoking),
                           ('drug_experimentation', bad_drug)):
            if bad:
                self.fallback_count += 1
                self.fallback_rows.add(row_num)
                logger.debug("row %d: %s=%r not numeric, using %r", row_num, field,
                             row[columns[field]], FIELD_DEFAULTS[field])

        return Person(
            peer_influence=peer,
            age_group=row[columns['age_group']],
            socioeconomic_status=row[columns['socioeconomic_status']],
            smoking_prevalence=smoking,
            drug_experimentation=drug,
        )
