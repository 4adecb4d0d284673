"""Text rendering of plants and operation outcomes."""
import json
from typing import Iterable, Iterator

from .models import Plant, Update
from .plants import RemoveOutcome, UpdateOutcome

NO_PLANTS_FOUND = "No se encontraron plantas"


def format_plant_id_line(plant: Plant) -> str:
    return f"{plant.id or ''}, '{plant.name}'"


def format_height(height_cm: float) -> str:
    """Whole heights print without a decimal part: 150, 42.5."""
    height_cm = float(height_cm)
    return str(int(height_cm)) if height_cm.is_integer() else repr(height_cm)


def format_tags(tags) -> str:
    return json.dumps(list(tags), ensure_ascii=False)


def format_update(index: int, update: Update) -> str:
    date = update.date.isoformat() if update.date else ""
    return (
        f"  Update {index}:\n"
        f"    Fecha: {date}\n"
        f"    Altura: {format_height(update.height_cm)} cm\n"
        f"    Imagen: {update.image_url}\n"
        f"    Comentario: '{update.comment}'"
    )


def format_plant(plant: Plant) -> str:
    lines = [
        f"Name: '{plant.name}'",
        f"Especie: '{plant.species}'",
        f"Tags: {format_tags(plant.tags)}",
        f"Notas: {plant.notes}",
        f"ID: '{plant.id or ''}',",
    ]
    if not plant.updates:
        lines.append("Updates: Ninguno")
    else:
        lines.extend(format_update(i, u) for i, u in enumerate(plant.updates, start=1))
    return "\n".join(lines) + "\n"


def format_plants(plants: Iterable[Plant], ids_only: bool = False) -> Iterator[str]:
    """Yield one rendered entry per plant, or the not-found message when there are none."""
    render = format_plant_id_line if ids_only else format_plant
    found = False
    for plant in plants:
        found = True
        yield render(plant)
    if not found:
        yield NO_PLANTS_FOUND


def format_added(plant_id) -> str:
    return f"Planta agregada, ID: {plant_id}"


def format_update_outcome(plant_id: str, outcome: UpdateOutcome) -> str:
    if outcome is UpdateOutcome.UPDATED:
        return f"Planta ID {plant_id} actualizada"
    if outcome is UpdateOutcome.NOT_FOUND:
        return f"No se encontró planta con ID {plant_id}"
    return "No se proporcionaron cambios para actualizar"


def format_remove_outcome(plant_id: str, outcome: RemoveOutcome) -> str:
    if outcome is RemoveOutcome.REMOVED:
        return f"Planta ID {plant_id} removida"
    return f"No se encontró planta con ID {plant_id}"
