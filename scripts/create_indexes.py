"""
Script to create the MongoDB indexes used by the plants collection.

Run this script once after pointing MONGO_URI at a new database:
    python scripts/create_indexes.py

Requirements:
    - A reachable MongoDB server (MONGO_URI, defaults to localhost)
    - the arbolitos package installed (pip install -e .)
"""

import sys

from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from arbolitos.errors import StorageError
from arbolitos.mongo_helper import connect

# Configuration
INDEXES = [
    ("name", ASCENDING),
    ("species", ASCENDING),
    ("tags", ASCENDING),
    ("created_at", DESCENDING),
]


def create_indexes(collection):
    """Create the plants indexes. create_index is a no-op for indexes that already exist."""
    try:
        for field_name, direction in INDEXES:
            index_name = collection.create_index([(field_name, direction)])
            print(f"✓ Index {index_name} ready on {collection.name}")
        return True
    except PyMongoError as e:
        print(f"Error creating indexes: {e}")
        return False


def main():
    try:
        with connect() as collection:
            return create_indexes(collection)
    except StorageError as e:
        print(f"Error connecting to MongoDB: {e}")
        return False


if __name__ == '__main__':
    sys.exit(0 if main() else 1)
