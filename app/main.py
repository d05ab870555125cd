import logging

from fastapi import FastAPI

from app.api.events import router as events_router
from app.api.payments import router as payments_router
from app.core.config import settings

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("order_id", "owner", "event_id", "status", "conflicts", "reason", "error"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title="Event Booking & Payments", version="1.0.0")

app.include_router(events_router, prefix="/api/events", tags=["events"])
app.include_router(payments_router, prefix="/api/payment", tags=["payments"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
