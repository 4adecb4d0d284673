"""
arbolitos/models.py

Plant and Update records and their persisted MongoDB shape.

A Plant document looks like:

    {
        "_id": ObjectId(...),          # assigned by MongoDB on insert
        "name": "Limonero",
        "species": "Citrus limon",
        "tags": ["frutal", "patio"],
        "notes": "",
        "updates": [{"date": ..., "height_cm": 35.0, "image_url": "", "comment": ""}],
        "created_at": datetime(...),
    }
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def split_tags(raw: Optional[str]) -> List[str]:
    """Split a comma-separated tag string, trimming whitespace and dropping empty pieces."""
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


@dataclass
class Update:
    date: datetime
    height_cm: float = 0.0
    image_url: str = ""
    comment: str = ""

    @classmethod
    def new(cls, height_cm: Optional[float] = None, image_url: Optional[str] = None,
            comment: Optional[str] = None) -> "Update":
        return cls(
            date=utcnow(),
            height_cm=float(height_cm) if height_cm is not None else 0.0,
            image_url=image_url or "",
            comment=comment or "",
        )

    def to_document(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "height_cm": self.height_cm,
            "image_url": self.image_url,
            "comment": self.comment,
        }

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Update":
        return cls(
            date=doc.get("date"),
            height_cm=float(doc.get("height_cm") or 0.0),
            image_url=doc.get("image_url") or "",
            comment=doc.get("comment") or "",
        )


@dataclass
class Plant:
    name: str
    species: str
    tags: List[str] = field(default_factory=list)
    notes: str = ""
    updates: List[Update] = field(default_factory=list)
    created_at: Optional[datetime] = None
    id: Optional[ObjectId] = None

    @classmethod
    def new(cls, name: str, species: str, tags: List[str], notes: str = "") -> "Plant":
        return cls(name=name, species=species, tags=list(tags), notes=notes or "", created_at=utcnow())

    def to_document(self) -> Dict[str, Any]:
        """Persisted shape; ``_id`` is left out until MongoDB assigns one."""
        doc: Dict[str, Any] = {
            "name": self.name,
            "species": self.species,
            "tags": list(self.tags),
            "notes": self.notes,
            "updates": [u.to_document() for u in self.updates],
            "created_at": self.created_at,
        }
        if self.id is not None:
            doc["_id"] = self.id
        return doc

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Plant":
        return cls(
            id=doc.get("_id"),
            name=doc.get("name", ""),
            species=doc.get("species", ""),
            tags=list(doc.get("tags") or []),
            notes=doc.get("notes") or "",
            updates=[Update.from_document(u) for u in doc.get("updates") or []],
            created_at=doc.get("created_at"),
        )

    def __str__(self):
        return f"{self.name} ({self.species})"
