"""
arbolitos/mongo_helper.py

MongoDB connection helpers.

Provides:
- get_client(uri) — MongoClient with the fixed server selection timeout
- plants_collection(client) — the plants collection of the arbolitos database
- connect(uri) — context manager: ping, yield the collection, always close the client

Reads configuration from arbolitos.settings (MONGO_URI, MONGO_DB_NAME,
PLANTS_COLLECTION, SERVER_SELECTION_TIMEOUT_MS).
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from . import settings
from .errors import StorageError

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def get_client(uri: Optional[str] = None) -> MongoClient:
    return MongoClient(
        uri or settings.MONGO_URI,
        tz_aware=True,
        serverSelectionTimeoutMS=settings.SERVER_SELECTION_TIMEOUT_MS,
    )


def plants_collection(client: MongoClient) -> Collection:
    return client[settings.MONGO_DB_NAME][settings.PLANTS_COLLECTION]


@contextmanager
def connect(uri: Optional[str] = None) -> Iterator[Collection]:
    """
    Open a client, check the server answers a ping and yield the plants collection.
    The client is closed on every exit path, including errors raised by the caller.
    """
    try:
        client = get_client(uri)
    except (PyMongoError, ValueError) as e:
        logger.exception("Invalid MongoDB configuration: %s", e)
        raise StorageError(f"Error al crear cliente MongoDB: {e}") from e

    try:
        try:
            client[settings.MONGO_DB_NAME].command("ping")
        except PyMongoError as e:
            logger.exception("MongoDB ping failed: %s", e)
            raise StorageError(f"Error al conectar con MongoDB (ping fallido): {e}") from e
        logger.debug("Connected to MongoDB database %s", settings.MONGO_DB_NAME)
        yield plants_collection(client)
    finally:
        client.close()
        logger.debug("MongoDB client closed")
