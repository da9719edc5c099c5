"""
Router: POST /evaluate

Evaluates one line and returns its display strings.
Calculation errors are answered with 422 and the error class name.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_calculator
from api.schemas import ErrorResponse, EvaluateRequest, EvaluateResponse
from contracts import CalcError
from pipeline import LineCalculator

router = APIRouter(prefix="/evaluate", tags=["evaluate"])


@router.post(
    "",
    response_model=EvaluateResponse,
    responses={422: {"model": ErrorResponse}},
)
def evaluate(
    body: EvaluateRequest,
    calculator: LineCalculator = Depends(get_calculator),
):
    try:
        answer = calculator.answer(body.text)
    except CalcError as exc:
        return JSONResponse(
            status_code=422,
            content=ErrorResponse(detail=str(exc), error=type(exc).__name__).model_dump(),
        )
    return EvaluateResponse(**answer.model_dump())
