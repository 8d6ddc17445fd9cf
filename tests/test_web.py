import io
import logging

import pytest

from mortgage_calc.data_models import LoanTerms
from mortgage_calc.logging_config import setup_logging
from mortgage_calc_web.comparison_store import ComparisonStore


def _user_token(client):
    with client.session_transaction() as sess:
        return sess["user_token"]


def test_index_renders_defaults(client):
    response = client.get("/")
    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "Mortgage Calculator" in body
    assert "$2,528" in body
    assert "$400,000" in body
    assert "Yearly Breakdown" in body


def test_index_post_zero_rate(client):
    response = client.post("/", data={"principal": "100000", "rate": "0", "term": "10"})
    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "$833" in body
    assert "Principal: $100,000 (100%)" in body


def test_index_shows_validation_error(client):
    response = client.post("/", data={"principal": "-5", "rate": "5", "term": "30"})
    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "Principal must be positive" in body
    assert "Yearly Breakdown" not in body


def test_save_and_manage_comparisons(client):
    from mortgage_calc_web.app import comparison_store

    client.post(
        "/",
        data={"principal": "400000", "rate": "6.5", "term": "30", "action": "add_to_comparison", "scenario_name": "Thirty"},
    )
    client.post(
        "/",
        data={"principal": "400000", "rate": "6.5", "term": "15", "action": "add_to_comparison", "scenario_name": "Fifteen"},
    )
    token = _user_token(client)
    scenarios = comparison_store.list_scenarios(token)
    assert [s.name for s in scenarios] == ["Thirty", "Fifteen"]
    assert scenarios[1].terms == LoanTerms(400_000, 6.5, 15)
    assert scenarios[0].summary["monthly_payment"] == pytest.approx(2528.27, abs=0.01)

    body = client.get("/").get_data(as_text=True)
    assert "Saved Scenarios" in body and "Fifteen" in body

    response = client.post("/comparison/remove", data={"scenario_id": scenarios[0].id})
    assert response.status_code == 302
    assert [s.name for s in comparison_store.list_scenarios(token)] == ["Fifteen"]

    client.post("/comparison/clear")
    assert comparison_store.list_scenarios(token) == []


def test_plain_run_does_not_save(client):
    from mortgage_calc_web.app import comparison_store

    client.post("/", data={"principal": "300000", "rate": "5", "term": "20", "action": "run"})
    assert comparison_store.list_scenarios(_user_token(client)) == []


def test_api_amortization(client):
    response = client.get("/api/amortization", query_string={"principal": "400k", "rate": "6.5", "term": "30"})
    assert response.status_code == 200
    data = response.get_json()
    assert data["summary"]["monthly_payment"] == pytest.approx(2528.27, abs=0.01)
    assert len(data["schedule"]) == 360
    assert len(data["chart"]) == 31
    assert len(data["yearly"]) == 30
    assert [s["name"] for s in data["breakdown"]] == ["Principal", "Interest"]


@pytest.mark.parametrize(
    "query",
    [
        {"principal": "400000", "rate": "6.5", "term": "0"},
        {"principal": "400000", "rate": "-1", "term": "30"},
        {"principal": "abc", "rate": "6.5", "term": "30"},
        {"principal": "400000", "rate": "6.5", "term": "thirty"},
        {},
    ],
)
def test_api_rejects_invalid_input(client, query):
    response = client.get("/api/amortization", query_string=query)
    assert response.status_code == 400
    assert "error" in response.get_json()


def test_store_trims_oldest_scenarios():
    store = ComparisonStore("sqlite://", max_per_user=2)
    terms = LoanTerms(100_000, 5, 10)
    for name in ("first", "second", "third"):
        store.add_scenario("user-a", name, name, terms, {"monthly_payment": 1060.66})
    assert len(store.list_scenarios("user-a")) == 2
    assert store.list_scenarios("user-b") == []


def test_store_ignores_other_users_and_empty_tokens():
    store = ComparisonStore("sqlite://")
    terms = LoanTerms(250_000, 4.5, 20)
    store.add_scenario("", "ignored", "ignored", terms, {})
    store.add_scenario("owner", "s1", "Mine", terms, {"total_interest": 1.0})
    store.remove_scenario("intruder", "s1")
    store.clear_scenarios("intruder")
    scenarios = store.list_scenarios("owner")
    assert len(scenarios) == 1
    assert scenarios[0].terms == terms
    assert scenarios[0].summary == {"total_interest": 1.0}
    assert store.list_scenarios("") == []


def test_saved_scenarios_are_recomputed_from_terms(client):
    for term in ("30", "15"):
        client.post(
            "/",
            data={"principal": "250000", "rate": "5", "term": term, "action": "add_to_comparison", "scenario_name": f"{term}y"},
        )
    data = client.get("/api/comparison").get_json()
    scenarios = data["scenarios"]
    assert [s["name"] for s in scenarios] == ["30y", "15y"]
    for scenario in scenarios:
        years = scenario["terms"]["term_years"]
        assert scenario["payment_count"] == years * 12
        assert scenario["final_balance"] == pytest.approx(0.0, abs=1e-6)
        assert [p["period"] for p in scenario["chart"]] == [1] + list(range(12, years * 12 + 1, 12))
        assert scenario["chart"][-1]["total_principal"] == pytest.approx(250_000)
    assert scenarios[1]["summary"]["total_interest"] < scenarios[0]["summary"]["total_interest"]

    body = client.get("/").get_data(as_text=True)
    assert "comparison-chart" in body
    assert '"name": "15y"' in body


def test_comparison_api_without_saved_scenarios(client):
    assert client.get("/api/comparison").get_json() == {"scenarios": []}


def test_index_has_range_sliders(client):
    body = client.get("/").get_data(as_text=True)
    assert 'type="range" min="50000" max="2000000" step="10000"' in body
    assert 'type="range" min="0" max="15" step="0.125"' in body


def test_store_logs_through_package_logger():
    stream = io.StringIO()
    package_logger = setup_logging("DEBUG")
    handler = package_logger.handlers[0]
    previous = handler.setStream(stream)
    try:
        store = ComparisonStore("sqlite://", max_per_user=1)
        terms = LoanTerms(100_000, 5, 10)
        store.add_scenario("user-a", "first", "First", terms, {})
        store.add_scenario("user-a", "second", "Second", terms, {})
    finally:
        handler.setStream(previous)
        package_logger.setLevel(logging.INFO)
    output = stream.getvalue()
    assert "Saved scenario first (First) for user-a" in output
    assert "Dropped 1 old scenarios for user-a" in output
