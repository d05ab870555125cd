from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.schemas import CreateEventRequestSchema
from app.application.exceptions import (
    BookingConflict,
    PartialSuccess,
    Unauthorized,
    UpstreamRejected,
    UpstreamUnavailable,
)
from app.application.use_cases.create_booking import CreateBookingUseCase
from app.domain.entities.booking import CandidateEvent
from app.domain.entities.time_interval import TimeInterval
from app.domain.exceptions import InvalidInterval
from app.wiring.dependencies import get_create_booking_use_case


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/create-event")
def create_event(
    req: CreateEventRequestSchema,
    uc: CreateBookingUseCase = Depends(get_create_booking_use_case),
):
    if not req.access_token:
        return JSONResponse(status_code=401, content={"error": "Unauthorized"})
    if not req.user_email or not req.user_email.strip():
        return JSONResponse(status_code=400, content={"error": "userEmail is required"})

    try:
        interval = TimeInterval.from_iso(
            req.event.start.date_time,
            req.event.end.date_time,
            zone=req.event.start.time_zone,
            end_zone=req.event.end.time_zone,
        )
    except InvalidInterval as e:
        return JSONResponse(status_code=400, content={"error": "Invalid event interval", "details": str(e)})

    candidate = CandidateEvent(
        interval=interval,
        title=req.event.summary,
        description=req.event.description,
        owner_identity=req.user_email,
    )

    try:
        confirmation = uc.execute(candidate, req.access_token)
    except Unauthorized:
        return JSONResponse(status_code=401, content={"error": "Unauthorized"})
    except BookingConflict as e:
        return JSONResponse(
            status_code=409,
            content={"error": "Time slot not available", "conflicts": [c.to_dict() for c in e.conflicts]},
        )
    except UpstreamRejected as e:
        return JSONResponse(
            status_code=400,
            content={"error": "Failed to create event in Google Calendar", "details": e.details},
        )
    except UpstreamUnavailable as e:
        return JSONResponse(status_code=502, content={"error": "Calendar unavailable", "details": str(e)})
    except PartialSuccess as e:
        return JSONResponse(
            status_code=500,
            content={"error": "Event created but booking record was not saved", "event": e.external_event},
        )

    return {"success": True, "message": "Event created successfully!", "event": confirmation.external_event}
