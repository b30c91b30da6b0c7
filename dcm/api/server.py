"""FastAPI server exposing the payout engine over HTTP."""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from dcm import __version__
from dcm.config import get_settings
from dcm.engine import Side, compute_report
from dcm.exceptions import PayoutError

logger = logging.getLogger(__name__)

app = FastAPI(title="DCM Payout API", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class PayoutRequest(BaseModel):
    """Body of POST /api/payouts. leverage_bound falls back to config."""

    # rows stay raw so the engine can name the offending participant
    participants: list[dict[str, Any]] = Field(default_factory=list)
    winning_side: Side
    leverage_bound: float | None = None


@app.exception_handler(PayoutError)
async def payout_error_handler(request: Request, exc: PayoutError) -> JSONResponse:
    logger.warning(f"Rejected {request.url.path}: {exc}")
    return JSONResponse(status_code=422, content={"detail": exc.to_dict()})


@app.get("/api/health")
async def health() -> dict[str, Any]:
    return {"status": "ok", "version": __version__}


@app.get("/api/config")
async def get_config() -> dict[str, Any]:
    """Return the engine and display configuration in effect."""
    settings = get_settings()
    return {
        "engine": settings.engine.model_dump(),
        "display": settings.display.model_dump(),
    }


@app.post("/api/payouts")
def create_payouts(request: PayoutRequest) -> dict[str, Any]:
    """Compute payouts for the submitted participants."""
    leverage_bound = request.leverage_bound
    if leverage_bound is None:
        leverage_bound = get_settings().engine.leverage_bound

    report = compute_report(request.participants, request.winning_side, leverage_bound)
    return report.model_dump(mode="json")
