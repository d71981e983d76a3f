"""
Shared fixtures for the athlete hub API tests.

Run with: pytest -v
"""

import uuid
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from athlete_hub.db import Database, get_database
from athlete_hub.deps import get_fatigue_model, get_performance_models, get_text_generator
from athlete_hub.main import app
from athlete_hub.models import Athlete, PerformanceData


class FakeGenerator:
	"""Stands in for the Gemini client."""

	def __init__(self, text="Intro"):
		self.text = text
		self.error = None
		self.prompts = []

	async def generate(self, prompt):
		self.prompts.append(prompt)
		if self.error is not None:
			raise self.error
		return self.text


class FakePredictor:
	def __init__(self, result):
		self.result = result
		self.error = None
		self.calls = []

	async def predict(self, records):
		self.calls.append(list(records))
		if self.error is not None:
			raise self.error
		return self.result


class FakeFatigueModel:
	def __init__(self, output=(0.3, 0.2, 0.9)):
		self.output = list(output)
		self.error = None
		self.calls = []

	async def predict(self, time_series, baseline=None):
		self.calls.append((list(time_series), baseline))
		if self.error is not None:
			raise self.error
		return self.output


@pytest.fixture
def database():
	"""In-memory database shared by every session in a test."""
	db = Database("sqlite://")
	db.connect()
	yield db
	db.dispose()


@pytest.fixture
def generator():
	return FakeGenerator()


@pytest.fixture
def predictors():
	return {
		"performance": FakePredictor({"riskScore": 0.4, "confidenceScore": 0.9, "declineAreas": [], "timeFrame": "2 weeks", "recommendations": []}),
		"injuryRisk": FakePredictor({"injuryRiskScore": 0.2, "primaryRiskAreas": ["knee"], "contributingFactors": [], "preventionStrategies": []}),
	}


@pytest.fixture
def fatigue_model():
	return FakeFatigueModel()


@pytest.fixture
def client(database, generator, predictors, fatigue_model):
	app.dependency_overrides[get_database] = lambda: database
	app.dependency_overrides[get_text_generator] = lambda: generator
	app.dependency_overrides[get_performance_models] = lambda: predictors
	app.dependency_overrides[get_fatigue_model] = lambda: fatigue_model
	try:
		yield TestClient(app)
	finally:
		app.dependency_overrides.clear()


def add_athlete(database, name="Asha Rao", sport="Cricket", devices=None):
	athlete_id = uuid.uuid4().hex
	with database.session() as s:
		s.add(Athlete(id=athlete_id, name=name, sport=sport, profile={}, connected_devices=devices or []))
		s.commit()
	return athlete_id


def add_performance(database, athlete_id, date, **metrics):
	with database.session() as s:
		s.add(PerformanceData(athlete_id=athlete_id, date=date, metrics=metrics, injuries={"current": []}))
		s.commit()


def count_rows(database, model):
	with database.session() as s:
		return s.query(model).count()


@pytest.fixture
def athlete_id(database):
	return add_athlete(database)


@pytest.fixture
def now():
	return datetime.utcnow()
