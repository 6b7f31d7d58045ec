"""
FastAPI service for grade computation and daily planning.

This service exposes the grade engine and the workload planner as REST
endpoints over the configured document store. Every endpoint accepts an
optional ``today`` query parameter so clients in other timezones can ask for
their own calendar date.
"""
from __future__ import annotations

import typing as t
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import date

from fastapi import FastAPI, HTTPException

from grade_engine.calculator import grade_for_class_id, grades_by_class
from grade_engine.gpa import cumulative_gpa
from gradebook_store.models import Snapshot
from gradebook_store.store import DocumentStore, StorageError, get_store
from services.shared.models import (
    Assignment as PydanticAssignment,
    ComputeGradesRequest,
    GPAResponse,
    GradeResponse,
    GradesResponse,
    PoolResponse,
    TodayPlanResponse,
)
from workload_planner.planner import DailyPlanner, daily_quota
from workload_planner.pool import active_pool


# Global store and planner - initialized on startup
store: t.Optional[DocumentStore] = None
planner: t.Optional[DailyPlanner] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize resources on startup and cleanup on shutdown."""
    global store, planner

    if store is None:
        store = get_store()
    planner = DailyPlanner(store)

    yield


app = FastAPI(
    title="Gradebook Service",
    description="REST API for class grades, cumulative GPA and the daily workload plan",
    version="1.0.0",
    lifespan=lifespan,
)


def _reference_date(today: t.Optional[str]) -> date:
    if not today:
        return date.today()
    try:
        return date.fromisoformat(today)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Invalid date: {today!r}, expected YYYY-MM-DD")


def _load_snapshot() -> Snapshot:
    try:
        return store.load()
    except StorageError as e:
        raise HTTPException(status_code=500, detail=f"Failed to read gradebook: {e}")


def _grades_response(snapshot: Snapshot, reference: date) -> GradesResponse:
    grades = grades_by_class(snapshot, reference)
    return GradesResponse(
        date=reference.isoformat(),
        classes=[GradeResponse(class_id=class_id, **asdict(result)) for class_id, result in grades.items()],
        cumulative_gpa=cumulative_gpa(snapshot.classes, snapshot.assignments, reference, snapshot.status_lookup()),
    )


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy", "service": "gradebook-service"}


@app.get("/grades", response_model=GradesResponse)
def list_grades(today: t.Optional[str] = None) -> GradesResponse:
    """Grades every class of the stored gradebook."""
    reference = _reference_date(today)
    return _grades_response(_load_snapshot(), reference)


@app.get("/grades/{class_id}", response_model=GradeResponse)
def get_class_grade(class_id: str, today: t.Optional[str] = None) -> GradeResponse:
    """
    Grade one class.

    An unknown class id is not an error: it yields a 0% "N/A" result.
    """
    reference = _reference_date(today)
    result = grade_for_class_id(class_id, _load_snapshot(), reference)
    return GradeResponse(class_id=class_id, **asdict(result))


@app.get("/gpa", response_model=GPAResponse)
def get_cumulative_gpa(today: t.Optional[str] = None) -> GPAResponse:
    reference = _reference_date(today)
    snapshot = _load_snapshot()
    return GPAResponse(
        date=reference.isoformat(),
        cumulative_gpa=cumulative_gpa(snapshot.classes, snapshot.assignments, reference, snapshot.status_lookup()),
    )


@app.post("/grades/compute", response_model=GradesResponse)
def compute_grades(request: ComputeGradesRequest) -> GradesResponse:
    """
    Grade a document supplied in the request body.

    Stateless: nothing is read from or written to the store.
    """
    reference = _reference_date(request.today)
    document = request.document.model_dump(by_alias=True, exclude_none=True)
    return _grades_response(Snapshot.from_dict(document), reference)


@app.get("/planner/today", response_model=TodayPlanResponse)
def get_today_plan(today: t.Optional[str] = None) -> TodayPlanResponse:
    """
    Today's plan, regenerated and saved if the stored plan is from another day.
    """
    reference = _reference_date(today)
    try:
        result = planner.today(reference)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=f"Error building daily plan: {e}")
    return TodayPlanResponse(
        date=result.plan.date,
        ids=result.plan.ids,
        regenerated=result.regenerated,
        assignments=[PydanticAssignment(**a.to_dict()) for a in result.assignments],
    )


@app.get("/planner/pool", response_model=PoolResponse)
def get_active_pool(today: t.Optional[str] = None) -> PoolResponse:
    """Outstanding work due within the next seven days and the resulting daily quota."""
    reference = _reference_date(today)
    snapshot = _load_snapshot()
    pool = active_pool(snapshot.assignments, snapshot.status_lookup(), reference)
    return PoolResponse(
        date=reference.isoformat(),
        quota=daily_quota(len(pool)),
        assignments=[PydanticAssignment(**a.to_dict()) for a in pool],
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8003)
