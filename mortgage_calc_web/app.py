import json
import logging
import os
from dataclasses import asdict
from functools import lru_cache
from uuid import uuid4

from flask import Flask, jsonify, redirect, render_template, request, session, url_for

from mortgage_calc.data_models import LoanTerms
from mortgage_calc.engine import compute_for_terms
from mortgage_calc.formatter import format_currency
from mortgage_calc.logging_config import setup_logging
from mortgage_calc.reports import (
    chart_points,
    payment_breakdown,
    serialize_schedule,
    serialize_summary,
    serialize_yearly,
    summarize,
    yearly_rows,
)
from mortgage_calc.utils import parse_amount, parse_rate, validate_terms
from mortgage_calc_web.comparison_store import create_store_from_env

setup_logging(os.environ.get("MORTGAGE_CALC_LOG_LEVEL", "INFO"))
logger = logging.getLogger("mortgage_calc.web")

app = Flask(__name__)
app.secret_key = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
app.jinja_env.filters["currency"] = format_currency
comparison_store = create_store_from_env(os.environ.get("COMPARISON_DATABASE_URL"))

TERM_OPTIONS = (10, 15, 20, 30)
DEFAULT_FORM = {"principal": "400000", "rate": "6.5", "term": "30"}


def _ensure_user_token() -> str:
    token = session.get("user_token")
    if not token:
        token = uuid4().hex
        session["user_token"] = token
        session.modified = True
    return token


def _form_to_terms(form) -> LoanTerms:
    principal = parse_amount(form.get("principal", ""))
    rate = parse_rate(form.get("rate", ""))
    term_text = form.get("term", "").strip()
    try:
        term = int(term_text)
    except ValueError:
        raise ValueError(f"Invalid term: {term_text}")
    return validate_terms(principal, rate, term)


@lru_cache(maxsize=128)
def _cached_amortization(terms: LoanTerms):
    """Memoized engine call; ``LoanTerms`` is frozen and therefore hashable."""
    payment, schedule = compute_for_terms(terms)
    return payment, tuple(schedule)


def _run_analysis(terms: LoanTerms) -> dict:
    payment, schedule = _cached_amortization(terms)
    summary = summarize(terms.principal, payment, schedule)
    return {
        "summary": summary,
        "schedule": schedule,
        "chart": chart_points(schedule),
        "breakdown": payment_breakdown(summary),
        "yearly": yearly_rows(schedule),
    }


def _compare_saved(scenarios) -> list:
    """Recompute each saved scenario from its stored terms."""
    compared = []
    for scenario in scenarios:
        payment, schedule = _cached_amortization(scenario.terms)
        compared.append(
            {
                "id": scenario.id,
                "name": scenario.name,
                "terms": scenario.terms,
                "summary": serialize_summary(summarize(scenario.terms.principal, payment, schedule)),
                "payment_count": len(schedule),
                "final_balance": schedule[-1].ending_balance if schedule else 0.0,
                "chart": serialize_schedule(chart_points(schedule)),
            }
        )
    return compared


def _comparison_json(compared: list) -> list:
    return [dict(item, terms=asdict(item["terms"])) for item in compared]


def _handle_save_action(user_token: str, form, terms: LoanTerms, summary) -> None:
    scenario_name = form.get("scenario_name", "").strip() or "Scenario"
    scenario_id = uuid4().hex
    comparison_store.add_scenario(user_token, scenario_id, scenario_name, terms, serialize_summary(summary))


@app.route("/", methods=["GET", "POST"])
def index():
    form_values = dict(DEFAULT_FORM)
    error = None
    result = None

    user_token = _ensure_user_token()

    source = request.form if request.method == "POST" else request.args
    for key in form_values:
        if key in source:
            form_values[key] = source.get(key, "").strip()

    try:
        terms = _form_to_terms(form_values)
        result = _run_analysis(terms)
        if request.method == "POST" and request.form.get("action") == "add_to_comparison":
            _handle_save_action(user_token, request.form, terms, result["summary"])
    except ValueError as exc:
        logger.info("Rejected loan input %s: %s", form_values, exc)
        error = str(exc)

    chart_payload = json.dumps(serialize_schedule(result["chart"])) if result else "null"
    breakdown_payload = json.dumps(result["breakdown"]) if result else "null"
    comparison = _compare_saved(comparison_store.list_scenarios(user_token))

    return render_template(
        "index.html",
        form=form_values,
        term_options=TERM_OPTIONS,
        result=result,
        error=error,
        chart_payload=chart_payload,
        breakdown_payload=breakdown_payload,
        comparison_scenarios=comparison,
        comparison_payload=json.dumps(_comparison_json(comparison)),
    )


@app.get("/api/amortization")
def amortization_api():
    try:
        terms = _form_to_terms(request.args)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    result = _run_analysis(terms)
    return jsonify(
        {
            "summary": serialize_summary(result["summary"]),
            "schedule": serialize_schedule(result["schedule"]),
            "chart": serialize_schedule(result["chart"]),
            "breakdown": result["breakdown"],
            "yearly": serialize_yearly(result["yearly"]),
        }
    )


@app.get("/api/comparison")
def comparison_api():
    user_token = session.get("user_token")
    return jsonify({"scenarios": _comparison_json(_compare_saved(comparison_store.list_scenarios(user_token)))})


@app.post("/comparison/remove")
def remove_comparison():
    scenario_id = request.form.get("scenario_id")
    user_token = session.get("user_token")
    comparison_store.remove_scenario(user_token, scenario_id)
    return redirect(url_for("index"))


@app.post("/comparison/clear")
def clear_comparisons():
    user_token = session.get("user_token")
    comparison_store.clear_scenarios(user_token)
    return redirect(url_for("index"))


if __name__ == "__main__":
    logger.info("Starting Mortgage Calculator web app...")
    app.run(host="0.0.0.0", port=8710, debug=True)
