import json

import pytest

from src.handlers import main


def _event(method, path):
    return {"requestContext": {"http": {"method": method, "path": path}}}


def test_main_routes_health(monkeypatch):
    monkeypatch.setattr(main.health_check, "lambda_handler", lambda e, c: {"status": "ok"})
    resp = main.lambda_handler(_event("GET", "/health"), None)
    assert resp["status"] == "ok"


def test_main_routes_dashboard(monkeypatch):
    marker = {}

    def fake_handler(event, context):
        marker["called"] = True
        return {"statusCode": 200}

    monkeypatch.setattr(main.dashboard, "lambda_handler", fake_handler)
    resp = main.lambda_handler(_event("GET", "/dashboard"), None)
    assert resp["statusCode"] == 200
    assert marker["called"] is True


@pytest.mark.parametrize(
    "path, attr",
    [
        ("/customers", "customers_handler"),
        ("/conversations", "conversations_handler"),
        ("/insights", "insights_handler"),
        ("/insights/", "insights_handler"),
    ],
)
def test_main_routes_tables(monkeypatch, path, attr):
    monkeypatch.setattr(main.tables, attr, lambda e, c: {"table": attr})
    resp = main.lambda_handler(_event("GET", path), None)
    assert resp["table"] == attr


def test_main_routes_details(monkeypatch):
    monkeypatch.setattr(main.details, "customer_handler", lambda e, c: {"detail": "customer"})
    monkeypatch.setattr(main.details, "conversation_handler", lambda e, c: {"detail": "conversation"})
    assert main.lambda_handler(_event("GET", "/customers/c1"), None)["detail"] == "customer"
    assert main.lambda_handler(_event("GET", "/conversations/conv1"), None)["detail"] == "conversation"


def test_main_routes_vocabulary_before_insights(monkeypatch):
    monkeypatch.setattr(main.dashboard, "categories_handler", lambda e, c: {"vocab": "categories"})
    monkeypatch.setattr(main.dashboard, "topics_handler", lambda e, c: {"vocab": "topics"})
    monkeypatch.setattr(main.tables, "insights_handler", lambda e, c: {"vocab": None})
    assert main.lambda_handler(_event("GET", "/insights/categories"), None)["vocab"] == "categories"
    assert main.lambda_handler(_event("GET", "/insights/topics"), None)["vocab"] == "topics"


def test_main_unknown_route():
    resp = main.lambda_handler(_event("GET", "/unknown"), None)
    assert resp["statusCode"] == 404
    body = json.loads(resp["body"])
    assert body["message"] == "Route not found"


def test_main_rejects_writes():
    resp = main.lambda_handler(_event("POST", "/customers"), None)
    assert resp["statusCode"] == 404
