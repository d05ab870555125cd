from __future__ import annotations

import logging
from typing import Any

import httpx

from app.application.exceptions import AvailabilityQueryFailed, UpstreamRejected, UpstreamUnavailable
from app.application.ports.calendar import CalendarPort
from app.core.config import settings
from app.domain.entities.booking import BusyInterval, CandidateEvent
from app.domain.entities.time_interval import TimeInterval
from app.domain.exceptions import InvalidInterval


class GoogleCalendar(CalendarPort):
    def __init__(
        self,
        base_url: str | None = None,
        calendar_id: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = (base_url or settings.GOOGLE_CALENDAR_BASE_URL).rstrip("/")
        self._calendar_id = calendar_id or settings.GOOGLE_CALENDAR_ID
        self._client = client or httpx.Client(timeout=timeout or settings.HTTP_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

    def query_busy(self, window: TimeInterval, access_token: str) -> list[BusyInterval]:
        payload = {
            "timeMin": window.start.isoformat(),
            "timeMax": window.end.isoformat(),
            "items": [{"id": self._calendar_id}],
        }
        if window.zone:
            payload["timeZone"] = window.zone

        try:
            response = self._client.post(
                f"{self._base_url}/freeBusy",
                json=payload,
                headers=_auth_headers(access_token),
            )
        except httpx.HTTPError as e:
            raise AvailabilityQueryFailed(f"freeBusy request failed: {e}") from e

        if response.status_code >= 400:
            self._logger.error(
                "freeBusy query rejected",
                extra={"status": response.status_code, "error": response.text[:500]},
            )
            raise AvailabilityQueryFailed(f"freeBusy returned HTTP {response.status_code}")

        try:
            data = response.json()
            calendar = data["calendars"][self._calendar_id]
        except (ValueError, KeyError, TypeError) as e:
            raise AvailabilityQueryFailed("freeBusy response missing calendar data") from e

        if calendar.get("errors"):
            raise AvailabilityQueryFailed(f"freeBusy calendar errors: {calendar['errors']}")

        busy: list[BusyInterval] = []
        for period in calendar.get("busy", []):
            try:
                busy.append(BusyInterval(TimeInterval.from_iso(period["start"], period["end"])))
            except (KeyError, TypeError, InvalidInterval) as e:
                raise AvailabilityQueryFailed(f"Malformed busy period: {period!r}") from e
        return busy

    def create_event(self, candidate: CandidateEvent, access_token: str) -> dict[str, Any]:
        interval = candidate.interval
        start: dict[str, str] = {"dateTime": interval.start.isoformat()}
        end: dict[str, str] = {"dateTime": interval.end.isoformat()}
        if interval.zone:
            start["timeZone"] = interval.zone
            end["timeZone"] = interval.zone
        payload = {
            "summary": candidate.title,
            "description": candidate.description,
            "start": start,
            "end": end,
        }

        try:
            response = self._client.post(
                f"{self._base_url}/calendars/{self._calendar_id}/events",
                json=payload,
                headers=_auth_headers(access_token),
            )
        except httpx.HTTPError as e:
            self._logger.error("Error creating calendar event", extra={"error": str(e)})
            raise UpstreamUnavailable(f"Calendar create request failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {"raw": response.text}

        if not response.is_success:
            self._logger.error(
                "Calendar event creation rejected",
                extra={"status": response.status_code, "error": str(data)[:500]},
            )
            raise UpstreamRejected(data, status_code=response.status_code)

        self._logger.info("Calendar event created", extra={"event_id": data.get("id")})
        return data


def _auth_headers(access_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {access_token}", "Content-Type": "application/json"}
