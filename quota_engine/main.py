from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quota_engine.api.routers.freeze import router as freeze_router
from quota_engine.api.routers.pricing import router as pricing_router
from quota_engine.api.routers.usage import router as usage_router
from quota_engine.shared.config import get_settings


logging.basicConfig(level=get_settings().log_level)

app = FastAPI(title="Quota Engine API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(usage_router)
app.include_router(freeze_router)
app.include_router(pricing_router)


@app.get("/healthz")
def healthz():
    return {"status": "ok"}
