from datetime import date

import pytest

from app.services.prediction_service import prediction_service

NEXT_YEAR = date.today().year + 1


@pytest.fixture(scope="module")
def client(test_client):
    return test_client

def test_root(client):
    res = client.get("/")
    assert res.status_code == 200
    assert res.json() == {"message": "Welcome to the Predictive Hiring API!"}

def test_list_departments(client):
    res = client.get("/dashboard/departments")
    assert res.status_code == 200
    assert "Engineering" in res.json()

def test_train_with_parameters(client):
    body = {
        "training_start_date": "2024-03-15",
        "prediction_year": NEXT_YEAR,
        "trend": "up",
        "department": "Sales",
    }
    res = client.post("/dashboard/train", json=body)
    assert res.status_code == 200
    data = res.json()

    assert data["parameters"]["department"] == "Sales"
    assert data["loading"] is False
    assert data["historical"][0]["date"] == "2024-03-01"
    assert all(p["date"].endswith("-01") for p in data["historical"] + data["predictions"])
    assert data["predictions"][-1]["date"] == f"{NEXT_YEAR}-12-01"
    assert data["metrics"]["total_hires"] == sum(p["hires"] for p in data["historical"])
    assert data["metrics"]["predicted_hires"] == sum(p["hires"] for p in data["predictions"])
    assert {row["series"] for row in data["chart"]} == {"historical", "predicted"}

    # the session dashboard now reports the same cycle
    current = client.get("/dashboard/").json()
    assert current["historical"] == data["historical"]
    assert current["predictions"] == data["predictions"]

def test_train_with_defaults(client):
    res = client.post("/dashboard/train", json={})
    assert res.status_code == 200
    data = res.json()
    assert data["parameters"]["trend"] == "stable"
    assert data["parameters"]["prediction_year"] == NEXT_YEAR
    assert len(data["historical"]) == 13

@pytest.mark.parametrize("body", [
    {"prediction_year": 2000},
    {"training_start_date": "2019-12-31"},
    {"training_start_date": f"{NEXT_YEAR + 1}-01-01"},
    {"department": "Legal"},
    {"trend": "sideways"},
    {"prediction_year": 10000},
    {"prediction_year": date.today().year + 26},
])
def test_train_rejects_invalid_controls(client, body):
    res = client.post("/dashboard/train", json=body)
    assert res.status_code == 422

def test_stateless_forecast_zero_fills_empty_history(client):
    res = client.post("/dashboard/forecast", json={"history": [], "prediction_year": NEXT_YEAR})
    assert res.status_code == 200
    data = res.json()

    today = date.today()
    assert data[0]["date"] == date(today.year, today.month, 1).isoformat()
    assert data[-1]["date"] == f"{NEXT_YEAR}-12-01"
    assert len(data) == 12 - today.month + 1 + 12
    assert all(p["hires"] == 0 for p in data)

def test_stateless_forecast_continues_history(client):
    this_year = date.today().year
    history = [{"date": f"{this_year}-11-01", "hires": 30}, {"date": f"{this_year}-12-01", "hires": 31}]
    res = client.post("/dashboard/forecast", json={"history": history, "prediction_year": NEXT_YEAR})
    assert res.status_code == 200
    data = res.json()
    assert [p["date"] for p in data] == [f"{NEXT_YEAR}-{m:02d}-01" for m in range(1, 13)]
    assert all(p["hires"] >= 0 for p in data)

def test_forecast_rejects_negative_hires(client):
    res = client.post("/dashboard/forecast", json={"history": [{"date": "2025-01-01", "hires": -1}]})
    assert res.status_code == 422

def test_forecast_error_maps_to_503(client, monkeypatch):
    def broken_forecast(history, end_date, today=None, rng=None):
        raise RuntimeError("boom")
    monkeypatch.setattr(prediction_service, "forecast", broken_forecast)

    res = client.post("/dashboard/forecast", json={"history": []})
    assert res.status_code == 503
    assert res.json()["detail"] == "Forecast error: boom"

    res = client.post("/dashboard/train", json={})
    assert res.status_code == 503
    assert res.json()["detail"].startswith("Training error")

def test_rejected_year_leaves_dashboard_readable(client):
    before = client.get("/dashboard/").json()["parameters"]

    res = client.post("/dashboard/train", json={"prediction_year": 10000})
    assert res.status_code == 422

    res = client.get("/dashboard/")
    assert res.status_code == 200
    assert res.json()["parameters"] == before

def test_failed_cycle_keeps_previous_state(client, monkeypatch):
    client.post("/dashboard/train", json={"trend": "up"})
    before = client.get("/dashboard/").json()

    def broken_forecast(history, end_date, today=None, rng=None):
        raise RuntimeError("boom")
    monkeypatch.setattr(prediction_service, "forecast", broken_forecast)

    res = client.post("/dashboard/train", json={"trend": "down", "department": "HR"})
    assert res.status_code == 503

    res = client.get("/dashboard/")
    assert res.status_code == 200
    after = res.json()
    assert after["parameters"] == before["parameters"]
    assert after["historical"] == before["historical"]
    assert after["predictions"] == before["predictions"]
    assert after["loading"] is False

@pytest.mark.parametrize("year", [0, 2000, 10000])
def test_forecast_rejects_out_of_range_year(client, year):
    res = client.post("/dashboard/forecast", json={"history": [], "prediction_year": year})
    assert res.status_code == 422

def test_forecast_rejects_mid_month_dates(client):
    history = [{"date": "2025-01-15", "hires": 10}]
    res = client.post("/dashboard/forecast", json={"history": history, "prediction_year": NEXT_YEAR})
    assert res.status_code == 422

@pytest.mark.parametrize("dates", [
    ["2025-12-01", "2025-02-01", "2025-01-01"],
    ["2025-01-01", "2025-01-01"],
    ["2025-01-01", "2025-03-01"],
])
def test_forecast_rejects_history_out_of_month_order(client, dates):
    history = [{"date": d, "hires": 10} for d in dates]
    res = client.post("/dashboard/forecast", json={"history": history, "prediction_year": NEXT_YEAR})
    assert res.status_code == 422
