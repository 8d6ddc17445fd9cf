"""Persistence layer for saved comparison scenarios.

Visitors can save the loan they are looking at and line several of them up
side by side. Only the loan terms and the headline summary are stored; the
schedule is a pure function of the terms, so readers get ``LoanTerms`` back
and recompute it. The store defaults to SQLite for local development, but
accepts any SQLAlchemy-compatible URL (e.g. PostgreSQL/MySQL).
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlalchemy import Column, DateTime, Float, Integer, String, Text, create_engine, delete, select
from sqlalchemy.orm import declarative_base, sessionmaker

from mortgage_calc.data_models import LoanTerms

logger = logging.getLogger("mortgage_calc.web.store")

Base = declarative_base()

DEFAULT_DATABASE_URL = "sqlite:///comparison_data.sqlite3"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SavedScenarioRow(Base):
    __tablename__ = "mortgage_scenarios"

    id = Column(String(64), primary_key=True)
    owner = Column(String(64), index=True, nullable=False)
    name = Column(String(255), nullable=False)
    principal = Column(Float, nullable=False)
    annual_rate_percent = Column(Float, nullable=False)
    term_years = Column(Integer, nullable=False)
    summary_json = Column(Text, nullable=False)
    saved_at = Column(DateTime, default=_utcnow, nullable=False)


@dataclass(frozen=True)
class SavedScenario:
    """A saved loan as read back from the store."""

    id: str
    name: str
    terms: LoanTerms
    summary: Dict[str, Any]
    saved_at: datetime


class ComparisonStore:
    """Saved scenarios per visitor, newest ``max_per_user`` kept."""

    def __init__(self, url: str, *, max_per_user: int = 10) -> None:
        engine = create_engine(url, future=True)
        Base.metadata.create_all(engine)
        self._sessions = sessionmaker(engine, expire_on_commit=False, future=True)
        self._max_per_user = max_per_user

    def list_scenarios(self, owner: str) -> List[SavedScenario]:
        """Return the owner's scenarios, oldest first."""
        if not owner:
            return []
        query = (
            select(SavedScenarioRow)
            .where(SavedScenarioRow.owner == owner)
            .order_by(SavedScenarioRow.saved_at, SavedScenarioRow.id)
        )
        with self._sessions() as session:
            return [_to_scenario(row) for row in session.scalars(query)]

    def add_scenario(self, owner: str, scenario_id: str, name: str, terms: LoanTerms, summary: Dict[str, Any]) -> None:
        if not owner:
            return
        with self._sessions.begin() as session:
            session.add(
                SavedScenarioRow(
                    id=scenario_id,
                    owner=owner,
                    name=name,
                    principal=terms.principal,
                    annual_rate_percent=terms.annual_rate_percent,
                    term_years=terms.term_years,
                    summary_json=json.dumps(summary),
                )
            )
        logger.info("Saved scenario %s (%s) for %s", scenario_id, name, owner)
        self._keep_newest(owner)

    def remove_scenario(self, owner: str, scenario_id: str) -> None:
        if not owner:
            return
        with self._sessions.begin() as session:
            session.execute(
                delete(SavedScenarioRow).where(SavedScenarioRow.owner == owner, SavedScenarioRow.id == scenario_id)
            )

    def clear_scenarios(self, owner: str) -> None:
        if not owner:
            return
        with self._sessions.begin() as session:
            session.execute(delete(SavedScenarioRow).where(SavedScenarioRow.owner == owner))

    def _keep_newest(self, owner: str) -> None:
        if self._max_per_user <= 0:
            return
        stale = (
            select(SavedScenarioRow.id)
            .where(SavedScenarioRow.owner == owner)
            .order_by(SavedScenarioRow.saved_at.desc(), SavedScenarioRow.id.desc())
            .offset(self._max_per_user)
        )
        with self._sessions.begin() as session:
            stale_ids = list(session.scalars(stale))
            if stale_ids:
                session.execute(delete(SavedScenarioRow).where(SavedScenarioRow.id.in_(stale_ids)))
                logger.debug("Dropped %d old scenarios for %s", len(stale_ids), owner)


def _to_scenario(row: SavedScenarioRow) -> SavedScenario:
    return SavedScenario(
        id=row.id,
        name=row.name,
        terms=LoanTerms(row.principal, row.annual_rate_percent, row.term_years),
        summary=json.loads(row.summary_json),
        saved_at=row.saved_at,
    )


def create_store_from_env(url: str | None) -> ComparisonStore:
    return ComparisonStore(url or DEFAULT_DATABASE_URL)
