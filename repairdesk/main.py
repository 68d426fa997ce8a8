import logging

from fastapi import FastAPI

from repairdesk.api.v1.checklists import router as checklists_router
from repairdesk.api.v1.forms import router as forms_router
from repairdesk.api.v1.orders import router as orders_router
from repairdesk.api.v1.pickers import router as pickers_router
from repairdesk.core.config import settings

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("surface_id", "picker", "item_id", "category", "status", "state", "reason", "order_id", "error"):
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

app = FastAPI(title=f"{settings.SHOP_NAME} front desk", version="1.0.0")

app.include_router(pickers_router, prefix="/api/v1", tags=["pickers"])
app.include_router(forms_router, prefix="/api/v1", tags=["forms"])
app.include_router(checklists_router, prefix="/api/v1", tags=["checklists"])
app.include_router(orders_router, prefix="/api/v1", tags=["orders"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
