"""
Import planner reference data (tanks, growth curves, current occupancy) from
Excel or CSV.

Header names are flexible ("Area m2", "area (m²)", "Tank ID", "peso_g"...):
they are lower-cased, stripped and matched against the alias lists below.
"""

from __future__ import annotations

import logging
import math
import re
from pathlib import Path
from typing import Dict, List

import pandas as pd

from aquaplan_app.models import GrowthCurve, OccupancyGrid, Tank, TankKind
from aquaplan_app.services.errors import DataImportError

_LOG = logging.getLogger(__name__)

_TANK_ID_ALIASES = ("tank_id", "tank id", "tank", "id", "tank no", "tank no.", "tank #", "estanque")
_NAME_ALIASES = ("name", "tank name", "nombre")
_KIND_ALIASES = ("kind", "type", "tank type", "tipo")
_AREA_ALIASES = ("area", "area m2", "area (m2)", "area (m²)", "area m²", "size", "size (m2)", "area_m2")
_GENETICS_ALIASES = ("genetics_id", "genetics id", "genetics", "genetic line", "genetica")
_WEEK_ALIASES = ("week", "semana", "cycle week")
_WEIGHT_ALIASES = ("weight_grams", "weight", "weight (g)", "weight g", "weight_g", "peso", "peso_g")
_STATE_ALIASES = ("state", "status", "estado")
_GENERATION_ALIASES = ("generation", "gen", "generacion")

_CANONICAL = (
    ("tank_id", _TANK_ID_ALIASES),
    ("name", _NAME_ALIASES),
    ("kind", _KIND_ALIASES),
    ("area_m2", _AREA_ALIASES),
    ("genetics_id", _GENETICS_ALIASES),
    ("week", _WEEK_ALIASES),
    ("weight_g", _WEIGHT_ALIASES),
    ("state", _STATE_ALIASES),
    ("generation", _GENERATION_ALIASES),
)


def _normalize_header(name) -> str:
    key = str(name).lower().replace("\n", " ").replace("\r", " ").replace("\t", " ")
    key = re.sub(r"[^\w\s.()²#/-]", "", key)
    return re.sub(r"\s+", " ", key).strip()


def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    rename = {}
    for c in df.columns:
        key = _normalize_header(c)
        for canonical, aliases in _CANONICAL:
            if key in aliases and canonical not in rename.values():
                rename[c] = canonical
                break
    return df.rename(columns=rename)


def _require(df: pd.DataFrame, columns: tuple, source: str) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise DataImportError(f"{source}: missing column(s) {', '.join(missing)}")


def read_table(path: str | Path) -> pd.DataFrame:
    """Read a CSV or the first sheet of an Excel workbook into a normalized DataFrame."""
    p = Path(path)
    if not p.exists():
        raise DataImportError(f"File not found: {p}")
    try:
        if p.suffix.lower() in (".xlsx", ".xlsm", ".xls"):
            df = pd.read_excel(p, sheet_name=0)
        else:
            df = pd.read_csv(p)
    except (OSError, ValueError) as exc:
        _LOG.warning("Failed to read %s", p, exc_info=True)
        raise DataImportError(f"Cannot read {p.name}: {exc}") from exc
    df = df.dropna(how="all")
    return _normalize_columns(df)


def tanks_from_dataframe(df: pd.DataFrame, source: str = "tanks") -> List[Tank]:
    df = _normalize_columns(df)
    _require(df, ("tank_id", "kind", "area_m2"), source)
    tanks: List[Tank] = []
    for row in df.itertuples(index=False):
        try:
            tank_id = int(row.tank_id)
            kind = TankKind.parse(row.kind)
            area = float(row.area_m2)
        except (TypeError, ValueError) as exc:
            raise DataImportError(f"{source}: invalid tank row {row}: {exc}") from exc
        name = getattr(row, "name", "")
        if not isinstance(name, str):
            name = "" if name is None or (isinstance(name, float) and math.isnan(name)) else str(name)
        tanks.append(Tank(id=tank_id, name=name or f"Tank {tank_id}", kind=kind, area_m2=area))
    return tanks


def growth_curves_from_dataframe(df: pd.DataFrame, source: str = "growth curves") -> Dict[int, GrowthCurve]:
    df = _normalize_columns(df)
    _require(df, ("genetics_id", "week", "weight_g"), source)
    df = df.dropna(subset=["genetics_id", "week", "weight_g"])
    curves: Dict[int, GrowthCurve] = {}
    for genetics_id, group in df.groupby("genetics_id", sort=True):
        points = zip(group["week"].astype(float), group["weight_g"].astype(float))
        try:
            curves[int(genetics_id)] = GrowthCurve.from_points(int(genetics_id), points)
        except ValueError as exc:
            raise DataImportError(f"{source}: {exc}") from exc
    return curves


def occupancy_from_dataframe(df: pd.DataFrame, source: str = "occupancy") -> OccupancyGrid:
    df = _normalize_columns(df)
    _require(df, ("tank_id", "week", "state"), source)
    labels = {}
    generations = {}
    for row in df.itertuples(index=False):
        state = row.state
        if state is None or (isinstance(state, float) and math.isnan(state)):
            continue
        try:
            key = (int(row.tank_id), int(row.week))
        except (TypeError, ValueError) as exc:
            raise DataImportError(f"{source}: invalid occupancy row {row}: {exc}") from exc
        labels[key] = str(state)
        gen = getattr(row, "generation", "")
        if isinstance(gen, str) and gen:
            generations[key] = gen
    return OccupancyGrid.from_labels(labels, generations)


def load_tanks(path: str | Path) -> List[Tank]:
    tanks = tanks_from_dataframe(read_table(path), source=Path(path).name)
    _LOG.info("Loaded %d tanks from %s", len(tanks), path)
    return tanks


def load_growth_curves(path: str | Path) -> Dict[int, GrowthCurve]:
    curves = growth_curves_from_dataframe(read_table(path), source=Path(path).name)
    _LOG.info("Loaded %d growth curves from %s", len(curves), path)
    return curves


def load_occupancy(path: str | Path) -> OccupancyGrid:
    grid = occupancy_from_dataframe(read_table(path), source=Path(path).name)
    _LOG.info("Loaded %d occupied cells from %s", len(grid), path)
    return grid
