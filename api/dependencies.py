"""
dependencies.py — FastAPI Dependency Injection.
Every dependency returns the shared object from Request.app.state.
"""
from __future__ import annotations

from fastapi import Request

from pipeline import LineCalculator


def get_calculator(request: Request) -> LineCalculator:
    return request.app.state.calculator
