"""
monitor/routers/activity.py

Read-only views over the activity history.
- GET /activity: newest-first history
- GET /dashboard: worst of the latest forecast and diagnostic
"""

from fastapi import APIRouter, Depends

from monitor.dependencies import get_activity_log
from monitor.schemas import ActivityEntry, DashboardStatus
from monitor.services.activity import ActivityLog
from monitor.services.severity import dashboard_status

router = APIRouter()


@router.get("/activity", response_model=list[ActivityEntry])
async def list_activity(
    activity_log: ActivityLog = Depends(get_activity_log),
) -> list[ActivityEntry]:
    return list(activity_log.history())


@router.get("/dashboard", response_model=DashboardStatus)
async def get_dashboard(
    activity_log: ActivityLog = Depends(get_activity_log),
) -> DashboardStatus:
    return dashboard_status(
        activity_log.latest_of_type("prediction"),
        activity_log.latest_of_type("diagnostic"),
    )
