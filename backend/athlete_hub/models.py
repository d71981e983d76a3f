from __future__ import annotations
import uuid
from datetime import datetime
from typing import Any, Dict
from sqlalchemy import Column, String, DateTime, Integer, Float, Text, Boolean, JSON, ForeignKey
from .db import Base


def _new_id() -> str:
	return uuid.uuid4().hex


def _iso(value: datetime | None) -> str | None:
	return value.isoformat() if value is not None else None


# Device config keys that are kept in storage but never returned
CREDENTIAL_KEYS = frozenset({"apiKey", "apiSecret", "authToken", "accessToken", "refreshToken", "clientSecret", "password"})


def public_device(config: Dict[str, Any]) -> Dict[str, Any]:
	return {k: v for k, v in config.items() if k not in CREDENTIAL_KEYS}


class Athlete(Base):
	__tablename__ = "athletes"
	id = Column(String(32), primary_key=True, default=_new_id)
	name = Column(String(256), nullable=False)
	sport = Column(String(128), nullable=False)
	# Free-form profile document (position, location, achievements, ...)
	profile = Column(JSON, nullable=False, default=dict)
	# Device configs appended by the wearables handler; reassign the list to mark it dirty
	connected_devices = Column(JSON, nullable=False, default=list)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
	updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

	def to_dict(self) -> Dict[str, Any]:
		return {
			"id": self.id,
			"name": self.name,
			"sport": self.sport,
			"profile": self.profile or {},
			"connectedDevices": [public_device(d) for d in self.connected_devices or []],
			"createdAt": _iso(self.created_at),
		}


class CareerPrediction(Base):
	__tablename__ = "career_predictions"
	# Insert-only: no update or delete path exists
	id = Column(String(32), primary_key=True, default=_new_id)
	athlete_id = Column(String(32), ForeignKey("athletes.id"), nullable=False, index=True)
	form_data = Column(JSON, nullable=False)
	advice = Column(Text, nullable=False)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class PerformanceData(Base):
	__tablename__ = "performance_data"
	id = Column(String(32), primary_key=True, default=_new_id)
	athlete_id = Column(String(32), ForeignKey("athletes.id"), nullable=False, index=True)
	date = Column(DateTime, nullable=False, index=True)
	# endurance, recovery, painLevel, sleep, ...
	metrics = Column(JSON, nullable=False, default=dict)
	# {"current": [...], "past": [...]}
	injuries = Column(JSON, nullable=False, default=dict)

	def to_dict(self) -> Dict[str, Any]:
		return {
			"id": self.id,
			"athleteId": self.athlete_id,
			"date": _iso(self.date),
			"metrics": self.metrics or {},
			"injuries": self.injuries or {},
		}


class BiometricStatus(Base):
	__tablename__ = "biometric_status"
	id = Column(String(32), primary_key=True, default=_new_id)
	athlete_id = Column(String(32), ForeignKey("athletes.id"), nullable=False, index=True)
	timestamp = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
	device_type = Column(String(64), default="unknown", nullable=False)
	# Raw reading: heartRate, sleep, activity, stressLevel, bloodOxygen, ...
	reading = Column(JSON, nullable=False, default=dict)
	predictions = Column(JSON, nullable=False, default=dict)
	# Denormalised from predictions for baseline lookups
	fatigue_risk = Column(String(16), nullable=True, index=True)
	model_version = Column(String(64), nullable=False, default="lstm-v1.0")
	data_privacy_level = Column(String(32), nullable=False, default="restricted")

	def to_dict(self) -> Dict[str, Any]:
		return {
			**(self.reading or {}),
			"id": self.id,
			"athleteId": self.athlete_id,
			"timestamp": _iso(self.timestamp),
			"deviceType": self.device_type,
			"predictions": self.predictions or {},
		}


class VideoAnalysis(Base):
	__tablename__ = "video_analyses"
	id = Column(String(32), primary_key=True, default=_new_id)
	athlete_id = Column(String(32), ForeignKey("athletes.id"), nullable=False, index=True)
	video_id = Column(String(36), nullable=False, unique=True, index=True)
	video_url = Column(String(1024), nullable=False)
	exercise_type = Column(String(64), nullable=False)
	sport = Column(String(128), nullable=False)
	duration = Column(Float, nullable=False, default=0)
	analysis_complete = Column(Boolean, nullable=False, default=True)
	frames = Column(JSON, nullable=False, default=list)
	summary = Column(JSON, nullable=False, default=dict)
	model_version = Column(String(64), nullable=False, default="mediapipe-pose-1.0")
	processing_metrics = Column(JSON, nullable=False, default=dict)
	frame_count = Column(Integer, nullable=False, default=0)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

	def to_dict(self) -> Dict[str, Any]:
		# Frames are left out; they can be large
		return {
			"videoId": self.video_id,
			"athleteId": self.athlete_id,
			"videoUrl": self.video_url,
			"exerciseType": self.exercise_type,
			"sport": self.sport,
			"duration": self.duration,
			"summary": self.summary or {},
			"createdAt": _iso(self.created_at),
		}
