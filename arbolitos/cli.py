"""
arbolitos/cli.py

Command line entry point.

Usage::

    arbolitos view [--search-param STR] [--id STR] [--ids]
    arbolitos add -n NAME -s SPECIES -t TAGS [--notes STR]
    arbolitos update --id ID [-n NAME] [-s SPECIES] [--add-tag STR] [--remove-tag STR]
                     [--height-cm FLOAT] [--image-url STR] [--comment STR]
    arbolitos remove --id ID

Each invocation opens one MongoDB connection (MONGO_URI), runs a single
operation and closes the connection before exiting.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import presentation, settings
from .builders import PlantChanges, build_search_filter, check_tag_changes, parse_object_id
from .errors import ArbolitosError
from .mongo_helper import connect
from .plants import add_plant, remove_plant, update_plant, view_plants

logger = logging.getLogger(__name__)


def _view(collection, args: argparse.Namespace) -> None:
    plants = view_plants(collection, search_param=args.search_param, plant_id=args.id)
    for text in presentation.format_plants(plants, ids_only=args.ids):
        print(text)


def _add(collection, args: argparse.Namespace) -> None:
    inserted_id = add_plant(collection, args.name, args.species, args.tags, args.notes)
    print(presentation.format_added(inserted_id))


def _changes(args: argparse.Namespace) -> PlantChanges:
    return PlantChanges(
        name=args.name,
        species=args.species,
        add_tag=args.add_tag,
        remove_tag=args.remove_tag,
        height_cm=args.height_cm,
        image_url=args.image_url,
        comment=args.comment,
    )


def _update(collection, args: argparse.Namespace) -> None:
    outcome = update_plant(collection, args.id, _changes(args))
    print(presentation.format_update_outcome(args.id, outcome))


def _remove(collection, args: argparse.Namespace) -> None:
    outcome = remove_plant(collection, args.id)
    print(presentation.format_remove_outcome(args.id, outcome))


def check_arguments(args: argparse.Namespace) -> None:
    """Raise InvalidArgument for bad input so nothing is sent to MongoDB."""
    if args.command == "view":
        build_search_filter(args.search_param, args.id)
    elif args.command == "update":
        parse_object_id(args.id)
        check_tag_changes(_changes(args))
    elif args.command == "remove":
        parse_object_id(args.id)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arbolitos",
        description="Una CLI para gestionar el crecimiento de mis árboles y plantas",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Mostrar logs de depuración")
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    view = sub.add_parser("view", help="Ver plantas (con búsqueda por tag/especie/nombre o ID)")
    view.add_argument("--search-param", dest="search_param", help="Buscar por tag, especie o nombre")
    view.add_argument("--id", help="ID de la planta (ObjectId)")
    view.add_argument("--ids", action="store_true", help="Mostrar solo ID y nombre")
    view.set_defaults(func=_view)

    add = sub.add_parser("add", help="Agregar nueva planta")
    add.add_argument("-n", "--name", required=True, help="Nombre de la planta")
    add.add_argument("-s", "--species", required=True, help="Especie de la planta")
    add.add_argument("-t", "--tags", required=True, help="Tags separados por comas")
    add.add_argument("--notes", default="", help="Notas iniciales")
    add.set_defaults(func=_add)

    update = sub.add_parser("update", help="Actualizar planta existente")
    update.add_argument("--id", required=True, help="ID de la planta a actualizar (ObjectId)")
    update.add_argument("-n", "--name", help="Nuevo nombre")
    update.add_argument("-s", "--species", help="Nueva especie")
    update.add_argument("--add-tag", dest="add_tag", help="Tag a agregar")
    update.add_argument("--remove-tag", dest="remove_tag", help="Tag a remover")
    update.add_argument("--height-cm", dest="height_cm", type=float, help="Nueva actualización: altura en cm")
    update.add_argument("--image-url", dest="image_url", help="Nueva actualización: URL de imagen")
    update.add_argument("--comment", help="Nueva actualización: comentario")
    update.set_defaults(func=_update)

    remove = sub.add_parser("remove", help="Remover planta")
    remove.add_argument("--id", required=True, help="ID de la planta a remover (ObjectId)")
    remove.set_defaults(func=_remove)

    return parser


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.LOG_LEVEL, logging.WARNING)
    logging.basicConfig(level=level, format=settings.LOG_FORMAT, stream=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    logger.debug("Running command %s", args.command)

    try:
        check_arguments(args)
        with connect() as collection:
            args.func(collection, args)
    except ArbolitosError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - manual execution
    sys.exit(main())
