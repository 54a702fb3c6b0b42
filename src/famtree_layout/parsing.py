"""Loading family trees from tree documents and GEDCOM files."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ged4py import GedcomReader

from .graph import PARENT_OF, SPOUSE_OF, graph_from_relationships, people_from_graph
from .models import GENDERS, FamilyTree, Person, Relationship

logger = logging.getLogger(__name__)


class TreeFormatError(ValueError):
    """Raised when a tree document does not have the expected shape."""


# ============================================================================
# Tree documents (the graph store's JSON shape)
# ============================================================================


def parse_tree_document(data: Mapping[str, Any]) -> FamilyTree:
    """
    Build a FamilyTree from a decoded tree document.

    Expected shape::

        {"name": "...", "rootId": "...", "people": {"<id>": {person}, ...}}

    Person records use the store's camelCase keys (`spouseId`, `childrenIds`,
    `birthYear`, `imageUrl`).
    """
    if not isinstance(data, Mapping):
        raise TreeFormatError("Tree document must be a JSON object")

    raw_people = data.get("people")
    if not isinstance(raw_people, Mapping):
        raise TreeFormatError("Tree document has no 'people' mapping")

    people: dict[str, Person] = {}
    for key, record in raw_people.items():
        if not isinstance(record, Mapping):
            raise TreeFormatError(f"Person {key!r} is not an object")
        for required in ("id", "name"):
            if record.get(required) is None:
                raise TreeFormatError(f"Person {key!r} is missing '{required}'")
        if str(record["id"]) != str(key):
            raise TreeFormatError(f"Person key {key!r} does not match id {record['id']!r}")
        gender = record.get("gender", "male")
        if gender not in GENDERS:
            raise TreeFormatError(f"Person {key!r} has unknown gender {gender!r}")
        if not isinstance(record.get("childrenIds", []), list):
            raise TreeFormatError(f"Person {key!r} has non-list 'childrenIds'")
        birth_year = record.get("birthYear")
        if birth_year is not None and (
            not isinstance(birth_year, int) or isinstance(birth_year, bool)
        ):
            raise TreeFormatError(f"Person {key!r} has non-integer 'birthYear' {birth_year!r}")
        people[str(key)] = Person.from_dict(record)

    root_id = data.get("rootId")
    return FamilyTree(
        name=str(data.get("name") or "Family Tree"),
        people=people,
        root_id=str(root_id) if root_id is not None else None,
    )


def load_tree_document(path: Path) -> FamilyTree:
    """Read a JSON tree document from disk."""
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise TreeFormatError(f"{path} is not valid JSON: {e}") from e
    tree = parse_tree_document(data)
    logger.info("Loaded %d people from %s", len(tree.people), path)
    return tree


def dump_tree_document(tree: FamilyTree) -> dict[str, Any]:
    """Inverse of `parse_tree_document`."""
    out: dict[str, Any] = {
        "name": tree.name,
        "people": {pid: p.to_dict() for pid, p in tree.people.items()},
    }
    if tree.root_id is not None:
        out["rootId"] = tree.root_id
    return out


# ============================================================================
# GEDCOM
# ============================================================================


def extract_xref(xref_id: str) -> str:
    """Strip the @ delimiters from a GEDCOM xref like '@I12@'."""
    return xref_id.strip().strip("@")


def extract_year(date_str: str | None) -> int | None:
    """
    Extract the year from a GEDCOM date string.

    Handles "25 NOV 1954", "ABT 1905", "BEF. JAN 1900", "(1839-08-29)" and
    similar; the first four-digit group is taken as the year.
    """
    if not date_str:
        return None

    s = date_str.strip().strip("()").rstrip("?")
    s = re.sub(
        r"^(ABT\.?|ABOUT|BEF\.?|BEFORE|AFT\.?|AFTER|EST\.?|CAL\.?|FROM|TO|BET\.?|CIRCA|CA\.?|AROUND):?\s*",
        "",
        s,
        flags=re.IGNORECASE,
    )
    match = re.search(r"(?<!\d)(\d{4})(?!\d)", s)
    if match is None:
        return None
    return int(match.group(1))


def extract_name(indi) -> str:
    """Extract the display name from an individual record."""
    name_rec = indi.sub_tag("NAME")
    if name_rec is None or name_rec.value is None:
        return "Unknown"

    name_value = name_rec.value
    # ged4py returns NAME as tuple: (given, surname, suffix)
    if isinstance(name_value, tuple):
        parts = [p for p in name_value if p]
        return " ".join(parts) if parts else "Unknown"

    # Fallback: string format "Given /Surname/"
    return " ".join(str(name_value).replace("/", " ").split()) or "Unknown"


def extract_gender(indi) -> str:
    """Map SEX to the two-valued gender used for layout; anything but M is female."""
    sex_rec = indi.sub_tag("SEX")
    sex = sex_rec.value if sex_rec else None
    if sex == "M":
        return "male"
    if sex != "F":
        logger.debug("Individual %s has sex %r; laid out as female", indi.xref_id, sex)
    return "female"


def extract_birth_year(indi) -> int | None:
    event = indi.sub_tag("BIRT")
    if event is None:
        return None
    date_rec = event.sub_tag("DATE")
    # ged4py may return DateValue objects
    if date_rec is None or not date_rec.value:
        return None
    return extract_year(str(date_rec.value))


def normalize_data(reader: GedcomReader) -> tuple[list[Person], list[Relationship]]:
    """
    Extract persons and relationships from parsed GEDCOM data.
    Persons carry no links yet; spouses and children come from FAM records.
    """
    persons: list[Person] = []
    relationships: list[Relationship] = []

    for rec in reader.records0("INDI"):
        if rec.xref_id is None:
            continue
        persons.append(
            Person(
                id=extract_xref(rec.xref_id),
                name=extract_name(rec),
                gender=extract_gender(rec),
                birth_year=extract_birth_year(rec),
                alive=rec.sub_tag("DEAT") is None,
            )
        )

    for rec in reader.records0("FAM"):
        if rec.xref_id is None:
            continue

        husb = rec.sub_tag("HUSB")
        wife = rec.sub_tag("WIFE")
        husb_id = extract_xref(husb.xref_id) if husb and husb.xref_id else None
        wife_id = extract_xref(wife.xref_id) if wife and wife.xref_id else None

        if husb_id and wife_id:
            relationships.append(Relationship(husb_id, wife_id, SPOUSE_OF))

        for child in rec.sub_tags("CHIL"):
            if not child.xref_id:
                continue
            child_id = extract_xref(child.xref_id)
            for parent_id in (husb_id, wife_id):
                if parent_id:
                    relationships.append(Relationship(parent_id, child_id, PARENT_OF))

    return persons, relationships


def load_gedcom(path: Path) -> FamilyTree:
    """Read a GEDCOM file into a FamilyTree rooted at its first individual."""
    with GedcomReader(str(path)) as reader:
        persons, relationships = normalize_data(reader)

    G = graph_from_relationships(persons, relationships)
    people = people_from_graph(G)
    logger.info(
        "Loaded %d people and %d relationships from %s", len(people), len(relationships), path
    )
    return FamilyTree(
        name=Path(path).stem,
        people=people,
        root_id=persons[0].id if persons else None,
    )


def load_tree(path: Path) -> FamilyTree:
    """Load a tree from a GEDCOM (.ged) file or a JSON tree document."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Tree file not found: {path}")
    if path.suffix.lower() == ".ged":
        return load_gedcom(path)
    return load_tree_document(path)
