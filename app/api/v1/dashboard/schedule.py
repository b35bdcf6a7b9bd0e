"""
Schedule Dashboard Routes
Owner endpoints for weekly working hours and recurring breaks
"""
from fastapi import APIRouter, Depends, HTTPException, Path, Response, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_barber, require_api_key
from app.config.database import get_db
from app.models.barber import Barber
from app.schemas.schedule import BreakCreate, CopyDayRequest, DayToggle, WorkingHourUpdate
from app.services.schedule.schedule_service import ScheduleService

router = APIRouter(
    prefix="/barbers/{barber_id}/schedule",
    tags=["dashboard-schedule"],
    dependencies=[Depends(require_api_key)]
)


@router.get("")
async def get_schedule(
        barber: Barber = Depends(get_barber),
        db: Session = Depends(get_db)
):
    """Working hours and breaks for the whole week, Sunday first"""
    return ScheduleService.get_week(db, barber.id)


@router.get("/breaks")
async def list_breaks(
        barber: Barber = Depends(get_barber),
        db: Session = Depends(get_db)
):
    return {"breaks": [b.to_dict() for b in ScheduleService.list_breaks(db, barber.id)]}


@router.delete("/breaks/{break_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_break(
        break_id: str = Path(...),
        barber: Barber = Depends(get_barber),
        db: Session = Depends(get_db)
):
    if not ScheduleService.delete_break(db, barber.id, break_id):
        raise HTTPException(status_code=404, detail="Break not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{day_of_week}")
async def save_working_hours(
        request: WorkingHourUpdate,
        day_of_week: int = Path(..., description="0=Sunday .. 6=Saturday"),
        barber: Barber = Depends(get_barber),
        db: Session = Depends(get_db)
):
    """Create or replace the opening window of a weekday"""
    working = ScheduleService.save_working_hour(
        db, barber.id, day_of_week, request.start_time, request.end_time, request.active
    )
    return working.to_dict()


@router.patch("/{day_of_week}/active")
async def toggle_day(
        request: DayToggle,
        day_of_week: int = Path(...),
        barber: Barber = Depends(get_barber),
        db: Session = Depends(get_db)
):
    """Open or close a weekday, keeping its saved hours"""
    return ScheduleService.set_day_active(db, barber.id, day_of_week, request.active).to_dict()


@router.post("/{day_of_week}/copy")
async def copy_day(
        request: CopyDayRequest,
        day_of_week: int = Path(...),
        barber: Barber = Depends(get_barber),
        db: Session = Depends(get_db)
):
    """Copy this weekday's hours and breaks to other weekdays"""
    copied = ScheduleService.copy_day(db, barber.id, day_of_week, request.target_days)
    return {"copied": [w.to_dict() for w in copied]}


@router.post("/{day_of_week}/breaks", status_code=status.HTTP_201_CREATED)
async def add_break(
        request: BreakCreate,
        day_of_week: int = Path(...),
        barber: Barber = Depends(get_barber),
        db: Session = Depends(get_db)
):
    brk = ScheduleService.add_break(
        db, barber.id, day_of_week, request.start_time, request.end_time, request.label
    )
    return brk.to_dict()
