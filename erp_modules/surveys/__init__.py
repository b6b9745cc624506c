"""
Route Surveys Module.

Pre-move surveys for oversize cargo: waypoint ordering, passability
against the transport envelope, and survey input validation.
"""

from erp_modules.surveys.mappers import (
    checklist_item_from_row,
    survey_from_row,
    survey_to_row,
    waypoint_from_row,
    waypoint_to_row,
)
from erp_modules.surveys.models import (
    ChecklistCategory,
    ChecklistStatus,
    Feasibility,
    RouteSurvey,
    RouteWaypoint,
    SurveyChecklistItem,
    SurveyStatus,
    SurveyStatusCounts,
    WaypointType,
)
from erp_modules.surveys.routes import (
    assess_waypoint_passability,
    calculate_status_counts,
    filter_surveys,
    format_dimensions,
    format_survey_number,
    format_travel_time,
    get_next_waypoint_order,
    group_checklist_by_category,
    impassable_waypoints,
    is_valid_survey_number,
    parse_survey_number,
    reorder_waypoints,
    search_surveys,
    sort_waypoints_by_order,
    transport_dimensions_for,
)
from erp_modules.surveys.validation import (
    is_valid_checklist_status,
    validate_feasibility_data,
    validate_survey_data,
    validate_waypoint_data,
)

__all__ = [
    "ChecklistCategory",
    "ChecklistStatus",
    "Feasibility",
    "RouteSurvey",
    "RouteWaypoint",
    "SurveyChecklistItem",
    "SurveyStatus",
    "SurveyStatusCounts",
    "WaypointType",
    "assess_waypoint_passability",
    "calculate_status_counts",
    "checklist_item_from_row",
    "filter_surveys",
    "format_dimensions",
    "format_survey_number",
    "format_travel_time",
    "get_next_waypoint_order",
    "group_checklist_by_category",
    "impassable_waypoints",
    "is_valid_checklist_status",
    "is_valid_survey_number",
    "parse_survey_number",
    "reorder_waypoints",
    "search_surveys",
    "sort_waypoints_by_order",
    "survey_from_row",
    "survey_to_row",
    "transport_dimensions_for",
    "validate_feasibility_data",
    "validate_survey_data",
    "validate_waypoint_data",
    "waypoint_from_row",
    "waypoint_to_row",
]
