"""Great-circle distance, bounding boxes and grid bucketing."""

import math
from dataclasses import dataclass
from typing import NamedTuple

EARTH_RADIUS_KM = 6371.0088
KM_PER_DEGREE = 111.0


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance between two points, in kilometres."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(a)))


@dataclass(frozen=True)
class BoundingBox:
    """Inclusive latitude/longitude ranges."""

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    def contains(self, latitude: float, longitude: float) -> bool:
        return (
            self.min_lat <= latitude <= self.max_lat
            and self.min_lon <= longitude <= self.max_lon
        )


def bounding_box(latitude: float, longitude: float, radius_km: float) -> BoundingBox:
    """Box enclosing every point within ``radius_km`` of the centre.

    The longitude half-width is the larger of the degrees-per-km estimate
    ``radius / (R * cos(lat))`` and the exact widest longitude reached by a
    great circle of that radius, so the box never cuts off a point at the
    full radius. Ranges are clamped to valid coordinates; the antimeridian
    is not wrapped.
    """
    angular = radius_km / EARTH_RADIUS_KM
    lat_rad = math.radians(latitude)
    lat_delta = math.degrees(angular)

    cos_lat = math.cos(lat_rad)
    if cos_lat <= 0.0 or math.sin(angular) >= cos_lat:
        lon_delta = 180.0
    else:
        estimate = math.degrees(angular / cos_lat)
        exact = math.degrees(math.asin(math.sin(angular) / cos_lat))
        lon_delta = max(estimate, exact)

    return BoundingBox(
        min_lat=max(-90.0, latitude - lat_delta),
        max_lat=min(90.0, latitude + lat_delta),
        min_lon=max(-180.0, longitude - lon_delta),
        max_lon=min(180.0, longitude + lon_delta),
    )


class BucketKey(NamedTuple):
    """Grid cell index; rendered as ``"<lat_index>_<lon_index>"``."""

    lat_index: int
    lon_index: int

    def __str__(self) -> str:
        return f"{self.lat_index}_{self.lon_index}"


class GeoBucketer:
    """Map coordinates onto a fixed-width equirectangular grid.

    Cells are ``bucket_size_degrees`` wide on both axes, so their width in
    kilometres shrinks toward the poles.

    Args:
        bucket_size_degrees: Angular width of a cell (default 0.5, ~55 km).
    """

    def __init__(self, bucket_size_degrees: float = 0.5) -> None:
        if bucket_size_degrees <= 0.0:
            raise ValueError("bucket_size_degrees must be positive")
        self._size = bucket_size_degrees

    @property
    def bucket_size_degrees(self) -> float:
        return self._size

    def bucket_for(self, latitude: float, longitude: float) -> BucketKey:
        return BucketKey(
            math.floor(latitude / self._size),
            math.floor(longitude / self._size),
        )

    def nearby_buckets(self, latitude: float, longitude: float, radius_km: float) -> list[BucketKey]:
        """Return the square block of cells around the centre cell."""
        steps = max(1, math.ceil(radius_km / (self._size * KM_PER_DEGREE)))
        base = self.bucket_for(latitude, longitude)
        return [
            BucketKey(lat, lon)
            for lat in range(base.lat_index - steps, base.lat_index + steps + 1)
            for lon in range(base.lon_index - steps, base.lon_index + steps + 1)
        ]

    def bucket_center(self, key: BucketKey) -> tuple[float, float]:
        return ((key.lat_index + 0.5) * self._size, (key.lon_index + 0.5) * self._size)
