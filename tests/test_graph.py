"""Tests for networkx graph conversion."""

import pytest
from conftest import as_graph, make_person

from famtree_layout.graph import (
    PARENT_OF,
    SPOUSE_OF,
    build_graph,
    get_lineage_subgraph,
    graph_from_relationships,
    people_from_graph,
)
from famtree_layout.models import Relationship


class TestBuildGraph:
    """Tests for building relationship graphs from person graphs."""

    def test_nodes_and_attributes(self, three_generations):
        G = build_graph(three_generations)
        assert set(G.nodes) == set(three_generations)
        assert G.nodes["f"]["person_name"] == "Frank"
        assert G.nodes["f"]["gender"] == "male"
        assert G.nodes["f"]["birth_year"] == 1980

    def test_edge_types(self, three_generations):
        G = build_graph(three_generations)
        assert G.edges["p1", "f"]["relationship_type"] == PARENT_OF
        assert G.edges["p2", "f"]["relationship_type"] == PARENT_OF
        assert G.edges["f", "fs"]["relationship_type"] == SPOUSE_OF
        assert G.edges["fs", "f"]["relationship_type"] == SPOUSE_OF

    def test_dangling_references_dropped(self):
        people = as_graph(make_person("a", spouse="ghost", children=["nobody"]))
        G = build_graph(people)
        assert list(G.nodes) == ["a"]
        assert G.number_of_edges() == 0


class TestRelationships:
    """Tests for graphs built from relationship records."""

    def test_graph_from_relationships(self):
        persons = [make_person("h"), make_person("w", gender="female"), make_person("c")]
        relationships = [
            Relationship("h", "w", SPOUSE_OF),
            Relationship("h", "c", PARENT_OF),
            Relationship("w", "c", PARENT_OF),
            Relationship("h", "ghost", PARENT_OF),
        ]
        G = graph_from_relationships(persons, relationships)
        assert G.number_of_nodes() == 3
        assert G.number_of_edges() == 3

    def test_people_from_graph(self):
        persons = [make_person("h"), make_person("w", gender="female"), make_person("c")]
        relationships = [
            Relationship("h", "w", SPOUSE_OF),
            Relationship("h", "c", PARENT_OF),
            Relationship("w", "c", PARENT_OF),
        ]
        people = people_from_graph(graph_from_relationships(persons, relationships))

        # Spouse links are made symmetric from a single SPOUSE_OF edge
        assert people["h"].spouse_id == "w"
        assert people["w"].spouse_id == "h"
        assert people["h"].children_ids == ["c"]
        assert people["w"].children_ids == ["c"]
        assert people["c"].spouse_id is None

    def test_children_keep_order(self):
        persons = [make_person(pid) for pid in ("p", "c3", "c1", "c2")]
        relationships = [Relationship("p", c, PARENT_OF) for c in ("c3", "c1", "c2")]
        people = people_from_graph(graph_from_relationships(persons, relationships))
        assert people["p"].children_ids == ["c3", "c1", "c2"]

    def test_round_trip(self, three_generations):
        people = people_from_graph(build_graph(three_generations))
        for pid, person in three_generations.items():
            assert people[pid].spouse_id == person.spouse_id
            assert people[pid].children_ids == person.children_ids
            assert people[pid].name == person.name


class TestLineageSubgraph:
    """Tests for extracting the part of a graph a lineage layout shows."""

    def test_excludes_siblings_of_ancestors(self):
        people = as_graph(
            make_person("gp", children=["dad", "uncle"]),
            make_person("dad", spouse="mum", children=["me"]),
            make_person("mum", gender="female", spouse="dad", children=["me"]),
            make_person("uncle"),
            make_person("me", children=["kid"]),
            make_person("kid"),
        )
        H = get_lineage_subgraph(build_graph(people), "me")
        assert set(H.nodes) == {"gp", "dad", "mum", "me", "kid"}

    def test_depth_limits(self):
        chain = [make_person(f"n{i}", children=[f"n{i + 1}"]) for i in range(6)]
        chain.append(make_person("n6"))
        G = build_graph(as_graph(*chain))
        H = get_lineage_subgraph(G, "n3", max_up=1, max_down=2)
        assert set(H.nodes) == {"n2", "n3", "n4", "n5"}

    def test_unknown_person(self, three_generations):
        with pytest.raises(ValueError, match="not found"):
            get_lineage_subgraph(build_graph(three_generations), "nobody")
