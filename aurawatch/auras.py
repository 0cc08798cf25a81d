"""
Aura metadata and the catalog used to resolve unlocked aura ids.
"""

from enum import IntEnum
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from aurawatch.logging_config import get_logger

logger = get_logger(__name__)

CATALOG_FILENAME = "Auras.json"


class AuraCategory(IntEnum):
    """Category ids used in Auras.json."""
    ORDINARY = 0
    REFINED = 1
    ENHANCED = 2
    ADVANCED = 3
    FORMIDABLE = 4
    CATASTROPHIC = 5
    ANNIHILATORY = 6
    EXCLUSIVE = 7
    VALENTINES = 8
    HALLOWEEN = 9
    CHRISTMAS = 10


def normalize_aura_id(value: Any) -> str:
    """Canonical string form of an aura id ("05" and 5 both become "5")."""
    text = str(value).strip()
    if text.isascii() and text.isdigit():
        return str(int(text))
    return text


class Aura(BaseModel):
    """A single aura record from Auras.json."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(alias="Id")
    name: str | None = Field(default=None, alias="Name")
    rarity: int = Field(default=0, alias="Rarity")
    tier: int = Field(default=0, alias="Tier")
    category: int = Field(default=0, alias="Category")
    sub_text: str = Field(default="", alias="SubText")
    special: bool = Field(default=False, alias="Special")

    @field_validator("id", mode="before")
    @classmethod
    def _normalize_id(cls, value: Any) -> str:
        return normalize_aura_id(value)

    @property
    def name_text(self) -> str | None:
        """
        Display name.

        "Event Horizon", or "Cupid (VALENTINE'S EXCLUSIVE)" when the
        aura has sub text.
        """
        if not self.sub_text:
            return self.name
        return f"{self.name} ({self.sub_text})"

    @property
    def rarity_text(self) -> str:
        """Display rarity, "1 in 1,000,000" or "???" when unknown."""
        if self.rarity:
            return f"1 in {self.rarity:,}"
        return "???"


class AuraCatalogData(BaseModel):
    """Top-level layout of Auras.json."""
    version: str = Field(default="", alias="Version")
    auras: list[Aura] = Field(default_factory=list, alias="Auras")


class AuraCatalog:
    """
    Lookup table from aura id to metadata.

    ``resolve_metadata`` never fails: unknown ids resolve to a
    placeholder record so classification does not depend on the
    catalog being current.
    """

    def __init__(self, data: AuraCatalogData, source: str = "<memory>") -> None:
        self.version = data.version
        self.source = source
        self._auras: dict[str, Aura] = {aura.id: aura for aura in data.auras}

    def __len__(self) -> int:
        return len(self._auras)

    def __contains__(self, aura_id: object) -> bool:
        return normalize_aura_id(aura_id) in self._auras

    @classmethod
    def from_json(cls, content: str, source: str = "<memory>") -> "AuraCatalog":
        """Build a catalog from JSON text (raises ValueError when invalid)."""
        return cls(AuraCatalogData.model_validate_json(content), source)

    @classmethod
    def bundled(cls) -> "AuraCatalog":
        """Catalog shipped inside the package."""
        resource = resources.files("aurawatch") / "data" / CATALOG_FILENAME
        return cls.from_json(resource.read_text(encoding="utf-8"), source="bundled")

    @classmethod
    def load(cls, path: str | Path | None = None) -> "AuraCatalog":
        """
        Load the catalog from ``path``, falling back to the bundled copy.

        Args:
            path: Auras.json, or a directory containing it. None uses
                the bundled copy directly.

        Returns:
            AuraCatalog instance
        """
        if path is not None:
            json_path = Path(path)
            if json_path.is_dir():
                json_path = json_path / CATALOG_FILENAME

            if json_path.exists():
                try:
                    catalog = cls.from_json(
                        json_path.read_text(encoding="utf-8"), source=str(json_path)
                    )
                    logger.info(
                        "Loaded %d aura(s) from %s (version %s)",
                        len(catalog), json_path, catalog.version or "unknown"
                    )
                    return catalog
                except (OSError, ValueError) as e:
                    logger.warning(
                        "Could not load aura catalog %s: %s. Using bundled catalog.",
                        json_path, e
                    )
            else:
                logger.info("Aura catalog %s not found. Using bundled catalog.", json_path)

        return cls.bundled()

    def resolve_metadata(self, aura_id: Any) -> Aura:
        """
        Resolve an aura id to its metadata.

        Args:
            aura_id: Id as captured from the log ("60") or as stored (60)

        Returns:
            The known record, or a placeholder with only the id set
        """
        key = normalize_aura_id(aura_id)
        aura = self._auras.get(key)
        if aura is None:
            logger.debug("Unknown aura id %s in catalog %s", key, self.source)
            return Aura(id=key)
        return aura
