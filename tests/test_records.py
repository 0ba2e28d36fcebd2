import pytest

from peergraph.records import Person, should_connect, bucket_key
from tests.conftest import person, random_people


def test_should_connect_close_peer_influence():
    assert should_connect(person(peer=7), person(peer=8, smoking=30.0, drug=35.0))


def test_tolerance_is_inclusive():
    assert should_connect(person(peer=3), person(peer=5))
    assert not should_connect(person(peer=3), person(peer=6))


def test_categoricals_must_match_exactly():
    assert not should_connect(person(age='10-14'), person(age='15-19'))
    assert not should_connect(person(ses='Low'), person(ses='low'))
    assert not should_connect(person(ses='Low'), person(ses='Low '))


def test_behaviour_fields_are_ignored():
    assert should_connect(person(smoking=0.0, drug=0.0), person(smoking=99.0, drug=99.0))


def test_custom_tolerance():
    assert not should_connect(person(peer=1), person(peer=2), tolerance=0)
    assert should_connect(person(peer=1), person(peer=6), tolerance=5)


def test_symmetry():
    people = random_people(60, seed=3)
    for a in people:
        for b in people:
            assert should_connect(a, b) == should_connect(b, a)


def test_person_is_immutable():
    p = person()
    with pytest.raises(AttributeError):
        p.peer_influence = 3


def test_bucket_key():
    assert bucket_key(person(age='15-19', ses='High')) == ('15-19', 'High')
