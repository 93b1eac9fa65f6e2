from dataclasses import dataclass
import csv
import logging
from pathlib import Path

from skyradar.errors import CatalogError
from skyradar.types import Landmark

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "data" / "landmarks.csv"


@dataclass
class LocalLandmarkCatalog:
    catalog_path: Path | None = None

    def _resolve_path(self) -> Path:
        if self.catalog_path is not None:
            return Path(self.catalog_path)
        return DEFAULT_CATALOG_PATH

    def list_landmarks(self) -> list[Landmark]:
        path = self._resolve_path()
        if not path.exists():
            raise FileNotFoundError(f"Landmark catalog not found: {path}")
        landmarks: list[Landmark] = []
        seen: set[str] = set()
        with open(path, "r", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            for line_no, row in enumerate(reader, start=2):
                try:
                    landmark = Landmark(
                        id=row["id"].strip(),
                        name=row["name"].strip(),
                        icon=(row.get("icon") or "").strip(),
                        latitude_deg=float(row["latitude_deg"]),
                        longitude_deg=float(row["longitude_deg"]),
                        city=_parse_optional(row.get("city")),
                        country=_parse_optional(row.get("country")),
                    )
                except (KeyError, TypeError, ValueError, AttributeError) as e:
                    raise CatalogError(f"{path}:{line_no}: invalid landmark row: {e}") from e
                if not landmark.id:
                    raise CatalogError(f"{path}:{line_no}: landmark id is empty")
                if landmark.id in seen:
                    raise CatalogError(f"{path}:{line_no}: duplicate landmark id {landmark.id!r}")
                seen.add(landmark.id)
                landmarks.append(landmark)
        logger.debug("Loaded %d landmarks from %s", len(landmarks), path)
        return landmarks


def _parse_optional(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None
