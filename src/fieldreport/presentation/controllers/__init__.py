"""Screen controllers. One class per screen, holding its state."""

from fieldreport.presentation.controllers.create_incident_controller import (
    CATEGORIES,
    CreateIncidentController,
)
from fieldreport.presentation.controllers.dashboard_controller import (
    DashboardController,
)
from fieldreport.presentation.controllers.incident_detail_controller import (
    IncidentDetailController,
)
from fieldreport.presentation.controllers.incident_list_controller import (
    STATUS_FILTERS,
    IncidentListController,
)
from fieldreport.presentation.controllers.login_controller import LoginController
from fieldreport.presentation.controllers.register_controller import (
    RegisterController,
)

__all__ = [
    "CATEGORIES",
    "STATUS_FILTERS",
    "CreateIncidentController",
    "DashboardController",
    "IncidentDetailController",
    "IncidentListController",
    "LoginController",
    "RegisterController",
]
