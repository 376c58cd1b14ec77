# src/geolength/io/config.py
import json
import os
from collections.abc import Mapping
from pathlib import Path

from geolength.config.models import GeodesyModel


def load_config(source: str | os.PathLike | Mapping | None = None) -> GeodesyModel:
    """Validate a mapping, or read and validate a JSON file; None gives the defaults."""
    if source is None:
        return GeodesyModel()
    if isinstance(source, Mapping):
        return GeodesyModel.model_validate(source)
    path = Path(os.path.expandvars(os.path.expanduser(str(source))))
    return GeodesyModel.model_validate_json(path.read_text(encoding="utf-8"))


def load_paths(source: str | os.PathLike) -> list[list[tuple[float, float]]]:
    """Read {"paths": [[[lon, lat], ...], ...]} from a JSON file."""
    path = Path(os.path.expandvars(os.path.expanduser(str(source))))
    data = json.loads(path.read_text(encoding="utf-8"))
    try:
        raw = data["paths"]
    except (KeyError, TypeError):
        raise ValueError(f"{path} has no 'paths' list")
    return [[(float(lon), float(lat)) for lon, lat in p] for p in raw]
