import inspect

from fastapi.testclient import TestClient

from api.main import create_app
from api.routers import evaluate
from config import Settings


def _client() -> TestClient:
    return TestClient(create_app(Settings()))


def test_evaluate_returns_all_radixes():
    response = _client().post("/evaluate", json={"text": "0xff + 1"})

    assert response.status_code == 200
    body = response.json()
    assert body["lines"] == ["256", "0x100", "0b1_00000000"]
    assert body["is_integer"] is True
    assert body["preprocessed"] == "0xff + 1"


def test_evaluate_reports_calc_errors_as_422():
    response = _client().post("/evaluate", json={"text": "5/0"})

    assert response.status_code == 422
    assert response.json()["error"] == "DivisionByZero"


def test_evaluate_reports_syntax_errors():
    response = _client().post("/evaluate", json={"text": "(1+"})

    assert response.status_code == 422
    assert response.json()["error"] == "ExpressionSyntaxError"


def test_health():
    response = _client().get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_evaluate_runs_in_threadpool():
    # CPU-bound work must not run on the event loop
    assert not inspect.iscoroutinefunction(evaluate.evaluate)


def test_evaluate_reports_integer_overflow():
    response = _client().post("/evaluate", json={"text": "2^100000000"})

    assert response.status_code == 422
    assert response.json()["error"] == "IntegerOverflow"
