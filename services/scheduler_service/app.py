"""
FastAPI service for work-session scheduling.

Exposes the scheduler engine and the master-schedule store as REST
endpoints. Scheduling is a short CPU-only computation, so it runs inline in
the request handler.
"""
from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, HTTPException, Response

from schedule_store import store
from schedule_store.server import format_master_schedule, to_master_schedule_record
from services.shared.models import (
    GenerateMasterScheduleRequest,
    MasterScheduleRecord,
    ScheduleRequest,
    ShowWorkSessionsResponse,
    WorkHoursRecord,
    WorkSessionRecord,
)
from work_scheduler.engine import allocate
from work_scheduler.errors import MissingWorkHoursError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize resources on startup and cleanup on shutdown."""
    if store.SCHEDULE_STORE_PATH:
        logger.info("Persisting master schedule to %s", store.SCHEDULE_STORE_PATH)
    yield


app = FastAPI(
    title="Scheduler Service",
    description="REST API for automatic work-session scheduling",
    version="1.0.0",
    lifespan=lifespan,
)


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy", "service": "scheduler-service"}


@app.post("/schedule/work-sessions", response_model=list[WorkSessionRecord])
async def schedule_work_sessions(request: ScheduleRequest) -> list[WorkSessionRecord]:
    """
    Schedule work sessions for a set of fixed tasks and assignments.

    Nothing is stored; use POST /master-schedule to regenerate the saved schedule.
    """
    try:
        sessions = allocate(
            [task.to_domain() for task in request.fixed_tasks],
            [assignment.to_domain() for assignment in request.assignments],
            request.work_hours.to_domain() if request.work_hours else None,
            request.now or datetime.now(),
        )
    except MissingWorkHoursError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Scheduling run failed")
        raise HTTPException(status_code=500, detail=f"Error scheduling work sessions: {str(e)}")

    return [WorkSessionRecord.from_domain(session) for session in sessions]


@app.put("/preferences/work-hours", response_model=WorkHoursRecord)
async def put_work_hours(request: WorkHoursRecord) -> WorkHoursRecord:
    """Save the user's daily work window."""
    store.save_work_hours(request.to_domain())
    return request


@app.get("/preferences/work-hours", response_model=WorkHoursRecord)
async def get_work_hours() -> WorkHoursRecord:
    """Return the saved daily work window."""
    work_hours = store.get_work_hours()
    if work_hours is None:
        raise HTTPException(status_code=404, detail="Work hours not set")
    return WorkHoursRecord(**work_hours.to_record())


@app.post("/master-schedule", response_model=MasterScheduleRecord)
async def generate_master_schedule(request: GenerateMasterScheduleRequest) -> MasterScheduleRecord:
    """
    Regenerate the master schedule with the saved work hours.

    The previously generated work sessions are replaced wholesale.
    """
    try:
        schedule = store.generate_master_schedule(
            [task.to_domain() for task in request.fixed_tasks],
            [assignment.to_domain() for assignment in request.assignments],
            now=request.now,
        )
    except MissingWorkHoursError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Master schedule generation failed")
        raise HTTPException(status_code=500, detail=f"Error generating master schedule: {str(e)}")

    return to_master_schedule_record(schedule)


@app.get("/master-schedule", response_model=MasterScheduleRecord)
async def get_master_schedule() -> MasterScheduleRecord:
    """Return the stored master schedule."""
    schedule = store.load_master_schedule()
    if schedule is None:
        raise HTTPException(status_code=404, detail="No master schedule generated yet")
    return to_master_schedule_record(schedule)


@app.delete("/master-schedule", status_code=204)
async def delete_master_schedule() -> Response:
    """Delete the stored master schedule."""
    store.clear_master_schedule()
    return Response(status_code=204)


@app.get("/master-schedule/sessions:show", response_model=ShowWorkSessionsResponse)
async def show_master_schedule() -> ShowWorkSessionsResponse:
    """
    Show the stored master schedule's work sessions in a formatted display.
    """
    try:
        formatted_display = format_master_schedule(store.load_master_schedule())
        return ShowWorkSessionsResponse(formatted_sessions=formatted_display)

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error formatting work sessions: {str(e)}")


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=os.getenv("AUTOSCHEDULER_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host="0.0.0.0", port=8004)
