"""Utilitaires géographiques / Geographic utilities."""

import math
from typing import Any, NamedTuple


class CoordinateCheck(NamedTuple):
    valid: bool
    error: str | None = None


def validate_coordinates(lat: Any, lng: Any) -> CoordinateCheck:
    """
    Valider une paire lat/lng / Validate a lat/lng pair.
    Valide ssi nombres finis, lat dans [-90, 90], lng dans [-180, 180].
    Valid iff finite numbers with lat in [-90, 90] and lng in [-180, 180].
    """
    if not _is_number(lat) or not _is_number(lng):
        return CoordinateCheck(False, "Coordinates must be numbers")
    if math.isnan(lat) or math.isnan(lng):
        return CoordinateCheck(False, "Coordinates cannot be NaN")
    if not -90 <= lat <= 90:
        return CoordinateCheck(False, f"Invalid latitude: {lat}. Must be between -90 and 90")
    if not -180 <= lng <= 180:
        return CoordinateCheck(False, f"Invalid longitude: {lng}. Must be between -180 and 180")
    return CoordinateCheck(True)


def is_valid_position(lat: Any, lng: Any) -> bool:
    return validate_coordinates(lat, lng).valid


def parse_coordinate(value: Any) -> float:
    """
    Convertir une valeur recue en float / Convert an incoming value to float.
    Les chaines numeriques sont acceptees; le reste donne NaN.
    Numeric strings are accepted; anything else yields NaN.
    """
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return math.nan
    return math.nan


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
