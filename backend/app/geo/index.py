from __future__ import annotations

import math
from typing import Callable, Dict, Iterable, List, Tuple

import numpy as np

from app.models.domain import GeoPoint

EARTH_RADIUS_KM = 6371.0
KM_PER_DEGREE_LAT = 2 * math.pi * EARTH_RADIUS_KM / 360.0

Predicate = Callable[[GeoPoint], bool]


def km(value: float) -> float:
    return float(value)


def accept_all(point: GeoPoint) -> bool:
    """Default inclusion filter. Must stay a no-op."""
    return True


def haversine_km(lat: float, lon: float, lats: np.ndarray, lons: np.ndarray) -> np.ndarray:
    """Great-circle distance from one point to many, in kilometres."""
    lat1, lon1 = np.radians(lat), np.radians(lon)
    lat2, lon2 = np.radians(lats), np.radians(lons)
    a = (
        np.sin((lat2 - lat1) / 2.0) ** 2
        + np.cos(lat1) * np.cos(lat2) * np.sin((lon2 - lon1) / 2.0) ** 2
    )
    return 2.0 * EARTH_RADIUS_KM * np.arcsin(np.sqrt(np.clip(a, 0.0, 1.0)))


class GeoIndex:
    """
    Clustering index: points are bucketed into fixed-size lat/lon grid cells so
    a radius query only has to measure points in the cells overlapping the
    radius bounding box.
    """

    def __init__(self, cell_size_km: float = 5.0) -> None:
        if cell_size_km <= 0:
            raise ValueError("cell_size_km must be positive")
        self.cell_size_deg = cell_size_km / KM_PER_DEGREE_LAT
        self.cells: Dict[Tuple[int, int], List[GeoPoint]] = {}
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def _cell(self, lat: float, lon: float) -> Tuple[int, int]:
        return (
            int(math.floor(lat / self.cell_size_deg)),
            int(math.floor(lon / self.cell_size_deg)),
        )

    def add(self, point: GeoPoint) -> None:
        self.cells.setdefault(self._cell(point.lat, point.lon), []).append(point)
        self._count += 1

    def add_all(self, points: Iterable[GeoPoint]) -> None:
        for point in points:
            self.add(point)

    def points(self) -> List[GeoPoint]:
        return [p for bucket in self.cells.values() for p in bucket]

    def _candidates(self, center: GeoPoint, max_radius_km: float) -> List[GeoPoint]:
        angular = max_radius_km / EARTH_RADIUS_KM
        lat_span = math.degrees(angular)
        cos_lat = math.cos(math.radians(center.lat))
        # Near the poles or the antimeridian the box does not map onto
        # contiguous cells, so scan everything.
        if cos_lat < 1e-6 or abs(center.lat) + lat_span >= 90.0:
            return self.points()
        # Longitude reach of a spherical cap, widest slightly poleward of
        # the center.
        reach = math.sin(angular) / cos_lat
        if reach >= 1.0:
            return self.points()
        lon_span = math.degrees(math.asin(reach))
        if abs(center.lon) + lon_span >= 180.0:
            return self.points()

        row_lo, col_lo = self._cell(center.lat - lat_span, center.lon - lon_span)
        row_hi, col_hi = self._cell(center.lat + lat_span, center.lon + lon_span)
        # One cell of slack each side for rounding at cell boundaries.
        row_lo, col_lo, row_hi, col_hi = row_lo - 1, col_lo - 1, row_hi + 1, col_hi + 1
        if (row_hi - row_lo + 1) * (col_hi - col_lo + 1) > len(self.cells):
            return self.points()

        found: List[GeoPoint] = []
        for row in range(row_lo, row_hi + 1):
            for col in range(col_lo, col_hi + 1):
                found.extend(self.cells.get((row, col), ()))
        return found

    def nearest(
        self,
        center: GeoPoint,
        max_results: int,
        max_radius_km: float,
        predicate: Predicate = accept_all,
    ) -> List[GeoPoint]:
        """
        Points within max_radius_km of center, nearest first, at most
        max_results of them, keeping only those the predicate accepts.
        """
        if not self._count or max_results <= 0:
            return []
        if not (math.isfinite(center.lat) and math.isfinite(center.lon)):
            return []

        candidates = [p for p in self._candidates(center, max_radius_km) if predicate(p)]
        if not candidates:
            return []

        lats = np.fromiter((p.lat for p in candidates), dtype=float, count=len(candidates))
        lons = np.fromiter((p.lon for p in candidates), dtype=float, count=len(candidates))
        distances = haversine_km(center.lat, center.lon, lats, lons)

        order = np.argsort(distances, kind="stable")
        within = order[distances[order] <= max_radius_km][:max_results]
        return [candidates[i] for i in within]
