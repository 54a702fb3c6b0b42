"""Data classes for family tree entities and layout output."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

Gender = Literal["male", "female"]
GENDERS: tuple[str, ...] = ("male", "female")

ConnectionType = Literal["spouse", "parent-child"]


@dataclass
class Person:
    id: str
    name: str
    gender: Gender
    spouse_id: str | None = None
    children_ids: list[str] = field(default_factory=list)
    birth_year: int | None = None
    alive: bool | None = None
    image_url: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Person":
        """Build a Person from the store's camelCase JSON record."""
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            gender=data.get("gender", "male"),
            spouse_id=_optional_id(data.get("spouseId")),
            children_ids=[str(c) for c in data.get("childrenIds", [])],
            birth_year=data.get("birthYear"),
            alive=data.get("alive"),
            image_url=data.get("imageUrl"),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "gender": self.gender,
            "childrenIds": list(self.children_ids),
        }
        if self.spouse_id is not None:
            out["spouseId"] = self.spouse_id
        if self.birth_year is not None:
            out["birthYear"] = self.birth_year
        if self.alive is not None:
            out["alive"] = self.alive
        if self.image_url is not None:
            out["imageUrl"] = self.image_url
        return out


def _optional_id(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


# id -> Person, the whole universe a layout call may traverse
PersonGraph = Mapping[str, Person]


@dataclass
class Relationship:
    person1_id: str
    person2_id: str
    relationship_type: str  # PARENT_OF, SPOUSE_OF


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass
class LayoutNode:
    person: Person
    x: float
    y: float
    width: float
    height: float
    generation: int
    is_spouse: bool = False
    is_child: bool = False
    is_parent: bool = False
    is_focused: bool = False

    @property
    def left(self) -> float:
        return self.x - self.width / 2

    @property
    def right(self) -> float:
        return self.x + self.width / 2

    @property
    def top(self) -> float:
        return self.y - self.height / 2

    @property
    def bottom(self) -> float:
        return self.y + self.height / 2


@dataclass
class Connection:
    type: ConnectionType
    from_point: Point
    to_point: Point
    from_id: str
    to_id: str

    @property
    def id(self) -> str:
        return f"{self.type}-{self.from_id}-{self.to_id}"


@dataclass
class Bounds:
    min_x: float
    max_x: float
    min_y: float
    max_y: float
    width: float
    height: float

    @classmethod
    def empty(cls) -> "Bounds":
        return cls(0, 0, 0, 0, 0, 0)


@dataclass
class LayoutResult:
    nodes: list[LayoutNode]
    connections: list[Connection]
    bounds: Bounds
    focused_node: LayoutNode | None = None

    @classmethod
    def empty(cls) -> "LayoutResult":
        return cls(nodes=[], connections=[], bounds=Bounds.empty(), focused_node=None)

    def node_for(self, person_id: str) -> LayoutNode | None:
        """Return the node placed for `person_id`, if any."""
        for node in self.nodes:
            if node.person.id == person_id:
                return node
        return None


@dataclass
class FamilyTree:
    """A named person graph as delivered by the graph store."""

    name: str
    people: dict[str, Person]
    root_id: str | None = None
