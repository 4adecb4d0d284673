"""
arbolitos/plants.py

Record operations on the plants collection.

Provides:
- add_plant(collection, name, species, tags, notes) — insert, returns the new ObjectId
- view_plants(collection, search_param, plant_id) — lazy iterator of Plant
- update_plant(collection, plant_id, changes) — one update_one call, returns UpdateOutcome
- remove_plant(collection, plant_id) — one delete_one call, returns RemoveOutcome

Arguments are validated before the collection is touched. Driver failures
are logged and re-raised as StorageError.
"""
from __future__ import annotations

import enum
import logging
from typing import Iterator, Optional

from bson import ObjectId
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from .builders import PlantChanges, build_search_filter, build_update_document, parse_object_id
from .errors import StorageError
from .models import Plant, split_tags

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class UpdateOutcome(enum.Enum):
    UPDATED = "updated"
    NO_CHANGES = "no_changes"
    NOT_FOUND = "not_found"


class RemoveOutcome(enum.Enum):
    REMOVED = "removed"
    NOT_FOUND = "not_found"


def add_plant(collection: Collection, name: str, species: str, tags: str, notes: str = "") -> ObjectId:
    plant = Plant.new(name, species, split_tags(tags), notes)
    try:
        result = collection.insert_one(plant.to_document())
    except PyMongoError as e:
        logger.exception("MongoDB insert failed for plant %s: %s", name, e)
        raise StorageError(f"Error al agregar planta: {e}") from e
    logger.info("Saved plant %s (%s)", result.inserted_id, name)
    return result.inserted_id


def view_plants(collection: Collection, search_param: Optional[str] = None,
                plant_id: Optional[str] = None) -> Iterator[Plant]:
    """
    Return a one-shot iterator over the plants matching the request.

    The filter is validated immediately; the query itself runs when the
    iterator is first consumed.
    """
    query = build_search_filter(search_param, plant_id)
    logger.debug("Finding plants with filter %s", query)
    return _iter_plants(collection, query)


def _iter_plants(collection: Collection, query) -> Iterator[Plant]:
    try:
        for doc in collection.find(query):
            yield Plant.from_document(doc)
    except PyMongoError as e:
        logger.exception("MongoDB find failed for filter %s: %s", query, e)
        raise StorageError(f"Error al buscar plantas: {e}") from e


def update_plant(collection: Collection, plant_id: str, changes: PlantChanges) -> UpdateOutcome:
    oid = parse_object_id(plant_id)
    update = build_update_document(changes)
    if update.is_empty():
        logger.debug("No changes supplied for plant %s", plant_id)
        return UpdateOutcome.NO_CHANGES

    try:
        result = collection.update_one({"_id": oid}, update.to_mongo())
    except PyMongoError as e:
        logger.exception("MongoDB update failed for plant %s: %s", plant_id, e)
        raise StorageError(f"Error al actualizar planta: {e}") from e

    if result.matched_count == 0:
        logger.info("Update matched no plant with id %s", plant_id)
        return UpdateOutcome.NOT_FOUND
    logger.info("Updated plant %s: %s", plant_id, update)
    return UpdateOutcome.UPDATED


def remove_plant(collection: Collection, plant_id: str) -> RemoveOutcome:
    oid = parse_object_id(plant_id)
    try:
        result = collection.delete_one({"_id": oid})
    except PyMongoError as e:
        logger.exception("MongoDB delete failed for plant %s: %s", plant_id, e)
        raise StorageError(f"Error al remover planta: {e}") from e

    if result.deleted_count > 0:
        logger.info("Deleted plant %s", plant_id)
        return RemoveOutcome.REMOVED
    logger.info("No plant to delete with id %s", plant_id)
    return RemoveOutcome.NOT_FOUND
