"""Shared fixtures for layout tests."""

from pathlib import Path

import pytest

from famtree_layout.models import Person

FIXTURES = Path(__file__).parent / "fixtures"


def make_person(pid, name=None, gender="male", spouse=None, children=(), birth_year=None):
    return Person(
        id=pid,
        name=name or pid,
        gender=gender,
        spouse_id=spouse,
        children_ids=list(children),
        birth_year=birth_year,
    )


def as_graph(*persons):
    return {p.id: p for p in persons}


@pytest.fixture
def three_generations():
    """Grandparents -> parents -> focus (with spouse) -> two children."""
    return as_graph(
        make_person("g1", "George", "male", spouse="g2", children=["p1"], birth_year=1920),
        make_person("g2", "Grace", "female", spouse="g1", children=["p1"], birth_year=1922),
        make_person("p1", "Peter", "male", spouse="p2", children=["f"], birth_year=1950),
        make_person("p2", "Paula", "female", spouse="p1", children=["f"], birth_year=1952),
        make_person("f", "Frank", "male", spouse="fs", children=["c1", "c2"], birth_year=1980),
        make_person("fs", "Fiona", "female", spouse="f", children=["c1", "c2"], birth_year=1981),
        make_person("c1", "Chris", "male", birth_year=2010),
        make_person("c2", "Clara", "female", birth_year=2012),
    )


@pytest.fixture
def wide_family():
    """A focus with three children, two of whom have families of their own."""
    return as_graph(
        make_person("root", "Henry Thompson", "male", spouse="rw", children=["a", "b", "c"]),
        make_person("rw", "Eleanor Thompson", "female", spouse="root", children=["a", "b", "c"]),
        make_person("a", "John Thompson", "male", spouse="aw", children=["a1", "a2", "a3"]),
        make_person("aw", "Mary Thompson", "female", spouse="a", children=["a1", "a2", "a3"]),
        make_person("b", "James", "male"),
        make_person("c", "Sarah Thompson-Williams", "female", spouse="cw", children=["c1"]),
        make_person("cw", "William Williams", "male", spouse="c", children=["c1"]),
        make_person("a1", "Emma", "female"),
        make_person("a2", "Oliver", "male", children=["a2x"]),
        make_person("a3", "Sophia", "female"),
        make_person("a2x", "Isabella", "female"),
        make_person("c1", "Liam Williams", "male"),
    )


@pytest.fixture
def tree_document():
    """A small tree document in the store's JSON shape."""
    return {
        "name": "Thompson Family",
        "rootId": "john",
        "people": {
            "henry": {
                "id": "henry",
                "name": "Henry Thompson",
                "gender": "male",
                "spouseId": "eleanor",
                "childrenIds": ["john"],
                "birthYear": 1940,
                "alive": False,
            },
            "eleanor": {
                "id": "eleanor",
                "name": "Eleanor Thompson",
                "gender": "female",
                "spouseId": "henry",
                "childrenIds": ["john"],
                "birthYear": 1942,
                "alive": True,
            },
            "john": {
                "id": "john",
                "name": "John Thompson",
                "gender": "male",
                "childrenIds": ["emma"],
                "birthYear": 1965,
            },
            "emma": {
                "id": "emma",
                "name": "Emma",
                "gender": "female",
                "childrenIds": [],
                "birthYear": 1995,
            },
        },
    }


@pytest.fixture
def sample_gedcom():
    return FIXTURES / "small.ged"
