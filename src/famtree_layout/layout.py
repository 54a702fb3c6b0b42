"""Layout engine for family tree visualization.

Computes node positions and connector geometry for the direct lineage of a
focused person:
- Node widths follow the length of the person's name
- Ancestors are placed above (one lineage, no siblings of ancestors)
- Descendants are placed below, each child centred in a slice wide enough
  for its whole visible subtree
- Spouses sit side by side, male on the left
- Depth is limited by `max_layers_up` / `max_layers_down`
"""

from __future__ import annotations

import logging

from .config import DEFAULT_CONFIG, LayoutConfig
from .models import (
    Bounds,
    Connection,
    LayoutNode,
    LayoutResult,
    Person,
    PersonGraph,
    Point,
)

logger = logging.getLogger(__name__)


def calculate_node_width(name: str, config: LayoutConfig = DEFAULT_CONFIG) -> int:
    """Width of a node for `name`, clamped to the configured min/max."""
    text_width = len(name) * config.char_width + config.padding
    return max(config.min_node_width, min(config.max_node_width, text_width))


def calculate_couple_width(
    person: Person, spouse: Person | None, config: LayoutConfig = DEFAULT_CONFIG
) -> int:
    """Width of a person and their spouse side by side."""
    width = calculate_node_width(person.name, config)
    if spouse is not None:
        width += calculate_node_width(spouse.name, config) + config.spouse_gap
    return width


def get_spouse(person: Person, people: PersonGraph) -> Person | None:
    """Return the spouse referenced by `person.spouse_id`, if it resolves."""
    if person.spouse_id is None:
        return None
    return people.get(person.spouse_id)


def find_parents(person_id: str, people: PersonGraph) -> list[Person]:
    """
    Find the parents of `person_id` by scanning the graph in iteration order.

    Only one member of each couple is returned: a scanned parent who is the
    spouse of an already collected parent is skipped, and is picked up later
    through `get_spouse` when the couple is placed.
    """
    parents: list[Person] = []
    for person in people.values():
        if person_id not in person.children_ids:
            continue
        if any(p.spouse_id == person.id for p in parents):
            continue
        parents.append(person)
    return parents


def calculate_subtree_width(
    person_id: str,
    people: PersonGraph,
    max_depth: int,
    config: LayoutConfig = DEFAULT_CONFIG,
    current_depth: int = 0,
    visited: set[str] | None = None,
) -> int:
    """
    Horizontal space needed for a person, their spouse and their descendants.

    Args:
        person_id: Root of the subtree
        people: The person graph
        max_depth: Deepest generation (relative to the root) that is counted
        config: Layout constants
        current_depth: Depth of `person_id` below the original root
        visited: Ids already accounted for on this branch; mutated in place.
            Each child is measured against its own copy so siblings never
            exclude one another.

    Returns:
        Width in pixels, never narrower than the couple itself. 0 when the id
        is beyond the depth limit, already visited, or does not resolve.
    """
    if visited is None:
        visited = set()
    if current_depth > max_depth or person_id in visited:
        return 0
    visited.add(person_id)

    person = people.get(person_id)
    if person is None:
        return 0

    spouse = get_spouse(person, people)
    if spouse is not None:
        visited.add(spouse.id)

    couple_width = calculate_couple_width(person, spouse, config)

    if not person.children_ids or current_depth >= max_depth:
        return couple_width

    children = [cid for cid in person.children_ids if cid in people and cid not in visited]
    children_width = sum(
        calculate_subtree_width(cid, people, max_depth, config, current_depth + 1, set(visited))
        for cid in children
    )
    if children:
        children_width += (len(children) - 1) * config.horizontal_gap

    return max(couple_width, children_width)


class _LayoutRun:
    """Bookkeeping for a single `compute_layout` call."""

    def __init__(self, focused_id: str, people: PersonGraph, config: LayoutConfig):
        self.focused_id = focused_id
        self.people = people
        self.config = config
        self.nodes: list[LayoutNode] = []
        self.connections: list[Connection] = []
        self.positioned: set[str] = set()
        self._by_id: dict[str, LayoutNode] = {}

    def place_node(
        self,
        person: Person,
        x: float,
        y: float,
        generation: int,
        *,
        is_spouse: bool,
        is_child: bool,
        is_parent: bool,
    ) -> bool:
        if person.id in self.positioned:
            return False
        node = LayoutNode(
            person=person,
            x=x,
            y=y,
            width=calculate_node_width(person.name, self.config),
            height=self.config.node_height,
            generation=generation,
            is_spouse=is_spouse,
            is_child=is_child,
            is_parent=is_parent,
            is_focused=person.id == self.focused_id,
        )
        self.nodes.append(node)
        self.positioned.add(person.id)
        self._by_id[person.id] = node
        return True

    def position_couple(
        self,
        person: Person,
        center_x: float,
        center_y: float,
        generation: int,
        *,
        is_child: bool,
        is_parent: bool,
    ) -> tuple[float, float, float]:
        """Place `person` and any unplaced spouse; return (left, right, center) x."""
        config = self.config
        spouse = get_spouse(person, self.people)
        person_width = calculate_node_width(person.name, config)

        if spouse is None or spouse.id in self.positioned:
            self.place_node(
                person,
                center_x,
                center_y,
                generation,
                is_spouse=False,
                is_child=is_child,
                is_parent=is_parent,
            )
            return center_x - person_width / 2, center_x + person_width / 2, center_x

        spouse_width = calculate_node_width(spouse.name, config)
        total_width = person_width + spouse_width + config.spouse_gap

        if person.gender == "male":
            left, right = person, spouse
        else:
            left, right = spouse, person
        left_width = calculate_node_width(left.name, config)
        right_width = calculate_node_width(right.name, config)

        left_x = center_x - total_width / 2 + left_width / 2
        right_x = center_x + total_width / 2 - right_width / 2

        placed = []
        for member, x in ((left, left_x), (right, right_x)):
            is_primary = member is person
            placed.append(
                self.place_node(
                    member,
                    x,
                    center_y,
                    generation,
                    is_spouse=not is_primary,
                    is_child=is_child and is_primary,
                    is_parent=is_parent,
                )
            )

        if all(placed):
            self.connections.append(
                Connection(
                    type="spouse",
                    from_point=Point(left_x + left_width / 2, center_y),
                    to_point=Point(right_x - right_width / 2, center_y),
                    from_id=left.id,
                    to_id=right.id,
                )
            )

        return left_x - left_width / 2, right_x + right_width / 2, center_x

    def position_descendants(
        self,
        parent: Person,
        parent_center_x: float,
        parent_y: float,
        generation: int,
        depth: int,
    ):
        config = self.config
        if depth >= config.max_layers_down:
            return

        children = [
            self.people[cid]
            for cid in dict.fromkeys(parent.children_ids)
            if cid in self.people and cid not in self.positioned
        ]
        if not children:
            return

        child_y = parent_y + config.vertical_gap + config.node_height

        widths = []
        for child in children:
            subtree_width = calculate_subtree_width(
                child.id,
                self.people,
                config.max_layers_down - depth - 1,
                config,
                visited=set(self.positioned),
            )
            min_width = calculate_couple_width(child, get_spouse(child, self.people), config)
            widths.append(max(subtree_width, min_width))

        total_width = sum(widths) + (len(children) - 1) * config.horizontal_gap
        current_x = parent_center_x - total_width / 2

        for child, width in zip(children, widths):
            _, _, child_center_x = self.position_couple(
                child,
                current_x + width / 2,
                child_y,
                generation + 1,
                is_child=True,
                is_parent=False,
            )

            child_node = self._by_id.get(child.id)
            if child_node is not None:
                self.connections.append(
                    Connection(
                        type="parent-child",
                        from_point=Point(parent_center_x, parent_y + config.node_height / 2),
                        to_point=Point(child_node.x, child_y - config.node_height / 2),
                        from_id=parent.id,
                        to_id=child.id,
                    )
                )

            self.position_descendants(child, child_center_x, child_y, generation + 1, depth + 1)
            current_x += width + config.horizontal_gap

    def position_ancestors(
        self,
        person_id: str,
        person_center_x: float,
        person_y: float,
        generation: int,
        depth: int,
    ):
        config = self.config
        if depth >= config.max_layers_up:
            return

        parents = [p for p in find_parents(person_id, self.people) if p.id not in self.positioned]
        if not parents:
            return

        # Direct lineage only: the first parent stands for the couple
        parent = parents[0]
        parent_y = person_y - config.vertical_gap - config.node_height
        _, _, center_x = self.position_couple(
            parent,
            person_center_x,
            parent_y,
            generation - 1,
            is_child=False,
            is_parent=True,
        )

        child_node = self._by_id.get(person_id)
        if child_node is not None:
            self.connections.append(
                Connection(
                    type="parent-child",
                    from_point=Point(center_x, parent_y + config.node_height / 2),
                    to_point=Point(child_node.x, person_y - config.node_height / 2),
                    from_id=parent.id,
                    to_id=person_id,
                )
            )

        self.position_ancestors(parent.id, center_x, parent_y, generation - 1, depth + 1)

    def bounds(self) -> Bounds:
        if not self.nodes:
            return Bounds.empty()
        min_x = min(n.left for n in self.nodes)
        max_x = max(n.right for n in self.nodes)
        min_y = min(n.top for n in self.nodes)
        max_y = max(n.bottom for n in self.nodes)
        return Bounds(min_x, max_x, min_y, max_y, max_x - min_x, max_y - min_y)


class LayoutEngine:
    """Computes layouts with a fixed set of constants."""

    def __init__(self, config: LayoutConfig | None = None):
        self.config = config or DEFAULT_CONFIG

    def compute_layout(self, focused_person_id: str, people: PersonGraph) -> LayoutResult:
        """
        Lay out the direct lineage of `focused_person_id`.

        The focused couple is centred on (0, 0). A focus id missing from
        `people` yields an empty result rather than an error.
        """
        focused = people.get(focused_person_id)
        if focused is None:
            logger.debug("Focused person %s not in graph; empty layout", focused_person_id)
            return LayoutResult.empty()

        run = _LayoutRun(focused_person_id, people, self.config)
        _, _, center_x = run.position_couple(
            focused, 0, 0, 0, is_child=False, is_parent=False
        )
        run.position_descendants(focused, center_x, 0, 0, 0)
        run.position_ancestors(focused_person_id, center_x, 0, 0, 0)

        focused_node = next((n for n in run.nodes if n.is_focused), None)
        logger.debug(
            "Layout for %s: %d nodes, %d connections",
            focused_person_id,
            len(run.nodes),
            len(run.connections),
        )
        return LayoutResult(
            nodes=run.nodes,
            connections=run.connections,
            bounds=run.bounds(),
            focused_node=focused_node,
        )


def compute_layout(
    focused_person_id: str, people: PersonGraph, config: LayoutConfig | None = None
) -> LayoutResult:
    """Lay out `people` around `focused_person_id` (see `LayoutEngine`)."""
    return LayoutEngine(config).compute_layout(focused_person_id, people)
