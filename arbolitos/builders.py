"""
arbolitos/builders.py

Translate optional user input into MongoDB filter and update documents.

Provides:
- parse_object_id(value) — validated ObjectId or InvalidArgument
- build_search_filter(search_param, plant_id) — $or regex search, _id match, or {}
- build_update_document(changes) — typed $set/$push/$pull document from PlantChanges

Update documents are built through UpdateDocument, which only knows three
operators and the plant fields they may touch.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from bson import ObjectId
from bson.errors import InvalidId

from .errors import InvalidArgument
from .models import Update

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

SEARCH_FIELDS = ("tags", "species", "name")


def parse_object_id(value: str) -> ObjectId:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as e:
        raise InvalidArgument(f"ID inválido '{value}': {e}") from e


def build_search_filter(search_param: Optional[str] = None, plant_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Return the find() filter for a view request.

    A search term is a case-insensitive regular expression, evaluated by
    the server, matched against tags, species and name; an identifier matches exactly one _id. Giving
    neither matches every plant, giving both is rejected.
    """
    if search_param is not None and plant_id is not None:
        raise InvalidArgument("No puedes usar --search-param e --id juntos")

    if search_param is not None:
        return {"$or": [{f: {"$regex": search_param, "$options": "i"}} for f in SEARCH_FIELDS]}

    if plant_id is not None:
        return {"_id": parse_object_id(plant_id)}

    return {}


class UpdateOperator(enum.Enum):
    SET = "$set"
    PUSH = "$push"
    PULL = "$pull"


# Fields each operator is allowed to touch
_ALLOWED_FIELDS = {
    UpdateOperator.SET: frozenset({"name", "species", "notes"}),
    UpdateOperator.PUSH: frozenset({"tags", "updates"}),
    UpdateOperator.PULL: frozenset({"tags"}),
}


class UpdateDocument:
    """Partial update for a single plant, restricted to field-set, list-append and list-remove."""

    def __init__(self):
        self._ops: Dict[UpdateOperator, Dict[str, Any]] = {}

    def _add(self, op: UpdateOperator, field_name: str, value: Any) -> "UpdateDocument":
        if field_name not in _ALLOWED_FIELDS[op]:
            raise ValueError(f"{op.value} is not supported on field {field_name!r}")
        self._ops.setdefault(op, {})[field_name] = value
        return self

    def set_field(self, field_name: str, value: Any) -> "UpdateDocument":
        return self._add(UpdateOperator.SET, field_name, value)

    def append(self, field_name: str, value: Any) -> "UpdateDocument":
        return self._add(UpdateOperator.PUSH, field_name, value)

    def remove(self, field_name: str, value: Any) -> "UpdateDocument":
        return self._add(UpdateOperator.PULL, field_name, value)

    def is_empty(self) -> bool:
        return not self._ops

    def to_mongo(self) -> Dict[str, Dict[str, Any]]:
        return {op.value: dict(fields) for op, fields in self._ops.items()}

    def __bool__(self):
        return not self.is_empty()

    def __repr__(self):
        return f"UpdateDocument({self.to_mongo()!r})"


@dataclass
class PlantChanges:
    name: Optional[str] = None
    species: Optional[str] = None
    add_tag: Optional[str] = None
    remove_tag: Optional[str] = None
    height_cm: Optional[float] = None
    image_url: Optional[str] = None
    comment: Optional[str] = None

    def has_update_entry(self) -> bool:
        return self.height_cm is not None or self.image_url is not None or self.comment is not None


def check_tag_changes(changes: PlantChanges) -> None:
    """
    Adding and removing a tag in the same call is rejected: both touch
    ``tags`` and MongoDB refuses conflicting operators on one path.
    """
    if changes.add_tag is not None and changes.remove_tag is not None:
        raise InvalidArgument("--add-tag y --remove-tag no se pueden usar juntos")


def build_update_document(changes: PlantChanges) -> UpdateDocument:
    """Build the update for one update_one() call."""
    check_tag_changes(changes)

    doc = UpdateDocument()
    if changes.name is not None:
        doc.set_field("name", changes.name)
    if changes.species is not None:
        doc.set_field("species", changes.species)
    if changes.add_tag is not None:
        doc.append("tags", changes.add_tag)
    if changes.remove_tag is not None:
        doc.remove("tags", changes.remove_tag)
    if changes.has_update_entry():
        entry = Update.new(changes.height_cm, changes.image_url, changes.comment)
        doc.append("updates", entry.to_document())

    logger.debug("Built update document: %r", doc)
    return doc
