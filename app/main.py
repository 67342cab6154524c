from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.admin.audit import router as audit_router
from app.api.delivery_requests import router as delivery_requests_router
from app.core.config import get_settings
from app.core.logging import configure_logging

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(delivery_requests_router)

# admin routers
app.include_router(audit_router)


@app.get("/")
def root():
    return {"ok": True, "docs": "/docs"}
