"""
schemas.py — Request/Response models for FastAPI.
Kept apart from contracts.py so the API can evolve independently.
"""
from __future__ import annotations

from pydantic import BaseModel, Field


# ─────────────────────────── /evaluate ───────────────────────────

class EvaluateRequest(BaseModel):
    text: str = Field(..., max_length=10_000)


class EvaluateResponse(BaseModel):
    text: str
    preprocessed: str
    lines: list[str]   # [decimal, hex, binary] or [float]
    is_integer: bool


class ErrorResponse(BaseModel):
    detail: str
    error: str         # error class name, e.g. "DivisionByZero"


# ─────────────────────────── /health ─────────────────────────────

class HealthResponse(BaseModel):
    status: str
    version: str
