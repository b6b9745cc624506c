"""Row mappers for route surveys, waypoints and checklist items."""

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from erp_kernel.domain.dates import to_date, to_datetime
from erp_kernel.domain.rows import optional, require_keys
from erp_kernel.domain.values import to_decimal
from erp_modules.surveys.models import (
    ChecklistCategory,
    ChecklistStatus,
    Feasibility,
    RouteSurvey,
    RouteWaypoint,
    SurveyChecklistItem,
    SurveyStatus,
    WaypointType,
)

SURVEY_REQUIRED = (
    "id", "survey_number", "cargo_description", "origin_location", "destination_location",
)
WAYPOINT_REQUIRED = ("id", "survey_id", "waypoint_order", "waypoint_type", "location_name")
CHECKLIST_REQUIRED = ("id", "survey_id", "category", "check_item")

_SURVEY_MEASURES = (
    "cargo_length_m",
    "cargo_width_m",
    "cargo_height_m",
    "cargo_weight_tons",
    "total_length_m",
    "total_width_m",
    "total_height_m",
    "total_weight_tons",
    "turning_radius_m",
    "route_distance_km",
    "estimated_travel_time_hours",
    "total_route_cost_estimate",
)

_WAYPOINT_MEASURES = (
    "km_from_start",
    "road_width_m",
    "vertical_clearance_m",
    "horizontal_clearance_m",
    "bridge_capacity_tons",
    "turn_radius_available_m",
    "action_cost_estimate",
)


def _measure(row: Mapping[str, Any], key: str) -> Decimal | None:
    value = row.get(key)
    return None if value is None else to_decimal(value)


def survey_from_row(row: Mapping[str, Any]) -> RouteSurvey:
    require_keys(row, "route_survey", SURVEY_REQUIRED)
    feasibility = row.get("feasibility")
    survey_date = row.get("survey_date")
    requested_at = row.get("requested_at")
    completed_at = row.get("completed_at")
    return RouteSurvey(
        id=str(row["id"]),
        survey_number=row["survey_number"],
        cargo_description=row["cargo_description"],
        origin_location=row["origin_location"],
        destination_location=row["destination_location"],
        status=SurveyStatus(optional(row, "status", "requested")),
        customer_id=row.get("customer_id"),
        job_order_id=row.get("job_order_id"),
        survey_date=None if survey_date is None else to_date(survey_date),
        surveyor_id=row.get("surveyor_id"),
        surveyor_name=row.get("surveyor_name"),
        feasibility=None if feasibility is None else Feasibility(feasibility),
        feasibility_notes=row.get("feasibility_notes"),
        escort_required=bool(optional(row, "escort_required", False)),
        requested_at=None if requested_at is None else to_datetime(requested_at),
        completed_at=None if completed_at is None else to_datetime(completed_at),
        notes=row.get("notes"),
        **{key: _measure(row, key) for key in _SURVEY_MEASURES},
    )


def survey_to_row(survey: RouteSurvey) -> dict[str, Any]:
    row: dict[str, Any] = {
        "id": survey.id,
        "survey_number": survey.survey_number,
        "cargo_description": survey.cargo_description,
        "origin_location": survey.origin_location,
        "destination_location": survey.destination_location,
        "status": survey.status.value,
        "customer_id": survey.customer_id,
        "job_order_id": survey.job_order_id,
        "survey_date": survey.survey_date,
        "surveyor_id": survey.surveyor_id,
        "surveyor_name": survey.surveyor_name,
        "feasibility": None if survey.feasibility is None else survey.feasibility.value,
        "feasibility_notes": survey.feasibility_notes,
        "escort_required": survey.escort_required,
        "requested_at": survey.requested_at,
        "completed_at": survey.completed_at,
        "notes": survey.notes,
    }
    row.update({key: getattr(survey, key) for key in _SURVEY_MEASURES})
    return row


def waypoint_from_row(row: Mapping[str, Any]) -> RouteWaypoint:
    require_keys(row, "route_waypoint", WAYPOINT_REQUIRED)
    return RouteWaypoint(
        id=str(row["id"]),
        survey_id=str(row["survey_id"]),
        waypoint_order=int(row["waypoint_order"]),
        waypoint_type=WaypointType(row["waypoint_type"]),
        location_name=row["location_name"],
        bridge_name=row.get("bridge_name"),
        action_required=row.get("action_required"),
        is_passable=bool(optional(row, "is_passable", True)),
        passable_notes=row.get("passable_notes"),
        **{key: _measure(row, key) for key in _WAYPOINT_MEASURES},
    )


def waypoint_to_row(waypoint: RouteWaypoint) -> dict[str, Any]:
    row: dict[str, Any] = {
        "id": waypoint.id,
        "survey_id": waypoint.survey_id,
        "waypoint_order": waypoint.waypoint_order,
        "waypoint_type": waypoint.waypoint_type.value,
        "location_name": waypoint.location_name,
        "bridge_name": waypoint.bridge_name,
        "action_required": waypoint.action_required,
        "is_passable": waypoint.is_passable,
        "passable_notes": waypoint.passable_notes,
    }
    row.update({key: getattr(waypoint, key) for key in _WAYPOINT_MEASURES})
    return row


def checklist_item_from_row(row: Mapping[str, Any]) -> SurveyChecklistItem:
    require_keys(row, "survey_checklist_item", CHECKLIST_REQUIRED)
    checked_at = row.get("checked_at")
    return SurveyChecklistItem(
        id=str(row["id"]),
        survey_id=str(row["survey_id"]),
        category=ChecklistCategory(row["category"]),
        check_item=row["check_item"],
        status=ChecklistStatus(optional(row, "status", "pending")),
        notes=row.get("notes"),
        checked_by=row.get("checked_by"),
        checked_at=None if checked_at is None else to_datetime(checked_at),
    )
