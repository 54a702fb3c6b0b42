"""Graph validation for family tree data."""

import logging

import networkx as nx

from .graph import PARENT_OF, build_graph
from .models import PersonGraph

logger = logging.getLogger(__name__)

# Youngest plausible age of a parent at a child's birth
MIN_PARENT_AGE = 12


def validate_people(people: PersonGraph) -> list[str]:
    """
    Validate a person graph for:
    - Dangling spouse/child references and self-references
    - Asymmetric spouse links
    - People recorded with more than two parents
    - Cycles in parent-child relationships
    - Impossible ages (child born before parent)

    The layout engine tolerates all of these; this only reports them.
    Returns a list of warning messages.
    """
    warnings: list[str] = []
    parent_count: dict[str, int] = {}

    for person in people.values():
        if person.spouse_id is not None:
            if person.spouse_id == person.id:
                warnings.append(f"Invalid: {person.name} is recorded as their own spouse")
            elif person.spouse_id not in people:
                warnings.append(f"Dangling: {person.name} has unknown spouse {person.spouse_id}")
            elif people[person.spouse_id].spouse_id != person.id:
                spouse = people[person.spouse_id]
                warnings.append(
                    f"Asymmetric: {person.name} lists {spouse.name} as spouse "
                    f"but not the other way round"
                )

        for child_id in dict.fromkeys(person.children_ids):
            if child_id == person.id:
                warnings.append(f"Invalid: {person.name} is recorded as their own child")
                continue
            if child_id not in people:
                warnings.append(f"Dangling: {person.name} has unknown child {child_id}")
                continue
            parent_count[child_id] = parent_count.get(child_id, 0) + 1

    for child_id, count in parent_count.items():
        if count > 2:
            warnings.append(f"Suspicious: {people[child_id].name} has {count} recorded parents")

    G = build_graph(people)
    parent_graph = nx.DiGraph(
        [(u, v) for u, v, d in G.edges(data=True) if d.get("relationship_type") == PARENT_OF]
    )
    # Self-loops are reported above
    parent_graph.remove_edges_from(list(nx.selfloop_edges(parent_graph)))

    try:
        cycle = nx.find_cycle(parent_graph, orientation="original")
        cycle_nodes = [edge[0] for edge in cycle]
        warnings.append(f"Cycle detected in parent-child relationships: {cycle_nodes}")
    except nx.NetworkXNoCycle:
        pass

    for parent_id, child_id in parent_graph.edges():
        parent = people[parent_id]
        child = people[child_id]
        if parent.birth_year is None or child.birth_year is None:
            continue
        if child.birth_year < parent.birth_year:
            warnings.append(f"Impossible: {child.name} born before parent {parent.name}")
        elif child.birth_year - parent.birth_year < MIN_PARENT_AGE:
            warnings.append(
                f"Suspicious: {parent.name} was less than {MIN_PARENT_AGE} years old "
                f"when {child.name} was born"
            )

    logger.debug("Validated %d people: %d warnings", len(people), len(warnings))
    return warnings
