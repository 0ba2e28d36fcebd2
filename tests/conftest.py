import random

import pytest

from peergraph.records import Person

HEADER = ("Year,Age_Group,Gender,Smoking_Prevalence,Drug_Experimentation,"
          "Socioeconomic_Status,Peer_Influence,School_Programs")

AGE_GROUPS = ['10-14', '15-19', '20-24']
SES = ['Low', 'Middle', 'High']


def person(peer=7, age='10-14', ses='Low', smoking=25.0, drug=30.0):
    return Person(peer, age, ses, smoking, drug)


def random_people(n, seed):

    rng = random.Random(seed)
    return [
        Person(
            peer_influence=rng.randint(1, 10),
            age_group=rng.choice(AGE_GROUPS),
            socioeconomic_status=rng.choice(SES),
            smoking_prevalence=round(rng.uniform(0, 50), 2),
            drug_experimentation=round(rng.uniform(0, 50), 2),
        )
        for _ in range(n)
    ]


@pytest.fixture
def write_csv(tmp_path):

    def _write(rows, header=HEADER, name='survey.csv'):
        path = tmp_path / name
        path.write_text(header + "\n" + "\n".join(rows) + "\n")
        return str(path)

    return _write


@pytest.fixture
def survey_csv(write_csv):
    # 0,1 connect; 2 alone (different ses); 3,4,5 a triangle
    rows = [
        "2020,10-14,M,25.0,30.0,Low,7,Yes",
        "2020,10-14,F,30.0,35.0,Low,8,No",
        "2021,10-14,F,40.0,10.0,High,7,No",
        "2021,15-19,M,12.5,20.0,Middle,3,Yes",
        "2022,15-19,F,17.5,22.0,Middle,4,Yes",
        "2022,15-19,M,20.0,24.0,Middle,5,No",
    ]
    return write_csv(rows)
