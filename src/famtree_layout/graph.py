"""NetworkX relationship graphs and conversion to/from person graphs."""

from __future__ import annotations

import networkx as nx

from .models import Person, PersonGraph, Relationship

PARENT_OF = "PARENT_OF"
SPOUSE_OF = "SPOUSE_OF"


def _add_person_node(G: nx.DiGraph, person: Person):
    # Note: use 'person_name' instead of 'name' to avoid conflict with pydot
    G.add_node(
        person.id,
        person_name=person.name,
        gender=person.gender,
        birth_year=person.birth_year,
        alive=person.alive,
        image_url=person.image_url,
    )


def build_graph(people: PersonGraph) -> nx.DiGraph:
    """
    Build a directed relationship graph from a person graph.

    PARENT_OF edges run parent -> child, SPOUSE_OF edges run person -> spouse.
    References to ids that are not in `people` are dropped.
    """
    G = nx.DiGraph()
    for person in people.values():
        _add_person_node(G, person)

    for person in people.values():
        if person.spouse_id is not None and person.spouse_id in people:
            G.add_edge(person.id, person.spouse_id, relationship_type=SPOUSE_OF)
        for child_id in person.children_ids:
            if child_id in people:
                G.add_edge(person.id, child_id, relationship_type=PARENT_OF)

    return G


def graph_from_relationships(
    persons: list[Person], relationships: list[Relationship]
) -> nx.DiGraph:
    """Build a relationship graph from person records and relationship edges."""
    G = nx.DiGraph()
    for person in persons:
        _add_person_node(G, person)

    for rel in relationships:
        if rel.person1_id not in G or rel.person2_id not in G:
            continue
        G.add_edge(rel.person1_id, rel.person2_id, relationship_type=rel.relationship_type)

    return G


def _spouses(G: nx.DiGraph, node) -> list:
    out = [v for v in G.successors(node) if G.edges[node, v].get("relationship_type") == SPOUSE_OF]
    out += [
        u
        for u in G.predecessors(node)
        if G.edges[u, node].get("relationship_type") == SPOUSE_OF and u not in out
    ]
    return out


def people_from_graph(G: nx.DiGraph) -> dict[str, Person]:
    """
    Collapse a relationship graph into a person graph.

    A person's spouse is their first SPOUSE_OF neighbour (either direction);
    children are PARENT_OF successors in edge insertion order.
    """
    people: dict[str, Person] = {}
    for node, data in G.nodes(data=True):
        spouses = _spouses(G, node)
        children = [
            str(v)
            for v in G.successors(node)
            if G.edges[node, v].get("relationship_type") == PARENT_OF
        ]
        people[str(node)] = Person(
            id=str(node),
            name=data.get("person_name") or "Unknown",
            gender=data.get("gender") or "male",
            spouse_id=str(spouses[0]) if spouses else None,
            children_ids=children,
            birth_year=data.get("birth_year"),
            alive=data.get("alive"),
            image_url=data.get("image_url"),
        )
    return people


def get_lineage_subgraph(
    G: nx.DiGraph, center_id: str, max_up: int = 4, max_down: int = 4
) -> nx.DiGraph:
    """
    Extract the part of the graph a lineage layout can show.

    Args:
        G: The full relationship graph
        center_id: The focused person
        max_up: Number of ancestor generations to include
        max_down: Number of descendant generations to include

    Returns:
        The induced subgraph of the focused person, their direct ancestors and
        descendants within the limits, and the spouses of all of them.
    """
    if center_id not in G:
        raise ValueError(f"Person ID {center_id} not found in graph")

    parent_graph = nx.DiGraph(
        [(u, v) for u, v, d in G.edges(data=True) if d.get("relationship_type") == PARENT_OF]
    )
    parent_graph.add_node(center_id)

    lineage: set = {center_id}
    down = nx.single_source_shortest_path_length(parent_graph, center_id, cutoff=max_down)
    lineage.update(down)
    up = nx.single_source_shortest_path_length(
        parent_graph.reverse(copy=False), center_id, cutoff=max_up
    )
    lineage.update(up)

    all_nodes = set(lineage)
    for node in lineage:
        all_nodes.update(_spouses(G, node))

    return G.subgraph(all_nodes).copy()
