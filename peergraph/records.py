# the per-person record and the rule deciding who gets connected to who.
# everything downstream (graph, analysis, dashboard) only ever sees Person tuples.

from typing import NamedTuple

from peergraph.constants import PEER_INFLUENCE_TOLERANCE


class Person(NamedTuple):
    """one survey row. tuples so records cant get mutated after loading"""

    peer_influence: int
    age_group: str
    socioeconomic_status: str
    smoking_prevalence: float
    drug_experimentation: float


def should_connect(person1: Person, person2: Person,
                   tolerance: int = PEER_INFLUENCE_TOLERANCE) -> bool:

    # symmetric by construction: abs() and == dont care about argument order.
    # never called with a person and itself, the builder only pairs i < j

    return (abs(person1.peer_influence - person2.peer_influence) <= tolerance
            and person1.age_group == person2.age_group
            and person1.socioeconomic_status == person2.socioeconomic_status)


def bucket_key(person: Person) -> tuple:
    # people in different buckets can never connect
    return (person.age_group, person.socioeconomic_status)
