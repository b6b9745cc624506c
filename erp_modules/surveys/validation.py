"""Input validators for surveys, waypoints and feasibility assessments."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from erp_kernel.domain.validation import ValidationResult, is_blank, negative_fields
from erp_modules.surveys.models import ChecklistStatus, Feasibility, WaypointType

SURVEY_MEASURE_FIELDS = (
    "cargo_length_m",
    "cargo_width_m",
    "cargo_height_m",
    "cargo_weight_tons",
    "total_length_m",
    "total_width_m",
    "total_height_m",
    "total_weight_tons",
    "ground_clearance_m",
    "turning_radius_m",
)

WAYPOINT_MEASURE_FIELDS = (
    "km_from_start",
    "road_width_m",
    "vertical_clearance_m",
    "horizontal_clearance_m",
    "bridge_capacity_tons",
    "bridge_width_m",
    "bridge_length_m",
    "turn_radius_available_m",
    "action_cost_estimate",
)

_FEASIBILITY_AMOUNTS = (
    ("route_distance_km", "Route distance"),
    ("estimated_travel_time_hours", "Estimated travel time"),
    ("total_route_cost_estimate", "Total route cost estimate"),
)


def validate_survey_data(data: Mapping[str, Any]) -> ValidationResult:
    errors: list[str] = []
    if is_blank(data.get("cargo_description")):
        errors.append("Cargo description is required")
    if is_blank(data.get("origin_location")):
        errors.append("Origin location is required")
    if is_blank(data.get("destination_location")):
        errors.append("Destination location is required")
    errors.extend(
        f"{name} must be a positive value"
        for name in negative_fields(data, SURVEY_MEASURE_FIELDS)
    )
    return ValidationResult.from_errors(errors)


def validate_waypoint_data(data: Mapping[str, Any]) -> ValidationResult:
    errors: list[str] = []
    waypoint_type = data.get("waypoint_type")
    if not waypoint_type:
        errors.append("Waypoint type is required")
    elif waypoint_type not in {t.value for t in WaypointType}:
        errors.append(f"Invalid waypoint type: {waypoint_type}")
    if is_blank(data.get("location_name")):
        errors.append("Location name is required")
    errors.extend(
        f"{name} must be a positive value"
        for name in negative_fields(data, WAYPOINT_MEASURE_FIELDS)
    )
    return ValidationResult.from_errors(errors)


def is_valid_checklist_status(status: str) -> bool:
    return status in {s.value for s in ChecklistStatus}


def validate_feasibility_data(data: Mapping[str, Any]) -> ValidationResult:
    errors: list[str] = []
    feasibility = data.get("feasibility")
    if not feasibility:
        errors.append("Feasibility assessment is required")
    elif feasibility not in {f.value for f in Feasibility}:
        errors.append("Invalid feasibility value")
    negatives = set(negative_fields(data, [key for key, _ in _FEASIBILITY_AMOUNTS]))
    errors.extend(
        f"{label} must be a positive value"
        for key, label in _FEASIBILITY_AMOUNTS
        if key in negatives
    )
    return ValidationResult.from_errors(errors)
