from __future__ import annotations
import httpx
from typing import Any, Dict, List, Optional, Sequence
from .settings import settings


class VertexEndpoint:
	"""A deployed Vertex AI model endpoint, called through the REST ``:predict`` method."""

	def __init__(
		self,
		endpoint: str,
		*,
		api_key: Optional[str] = None,
		base_url: Optional[str] = None,
		client: Optional[httpx.AsyncClient] = None,
	) -> None:
		self.endpoint = endpoint
		self.api_key = api_key or settings.vertex_api_key
		region = settings.vertex_region
		project = settings.vertex_project
		self.url = base_url or (
			f"https://{region}-aiplatform.googleapis.com/v1/projects/{project}/locations/{region}/endpoints/{endpoint}:predict"
		)
		self._client = client or httpx.AsyncClient(timeout=settings.http_timeout_seconds)

	async def predict(self, instances: List[Any], parameters: Optional[Dict[str, Any]] = None) -> Any:
		if not self.api_key:
			raise ValueError("VERTEX_API_KEY is not configured")
		payload: Dict[str, Any] = {"instances": instances}
		if parameters:
			payload["parameters"] = parameters
		r = await self._client.post(self.url, headers={"x-goog-api-key": self.api_key}, json=payload)
		r.raise_for_status()
		data = r.json()
		predictions = data.get("predictions") or []
		if not predictions:
			raise RuntimeError(f"Vertex endpoint {self.endpoint} returned no predictions")
		prediction = predictions[0]
		# Some deployed models wrap their output in a nested predictions list
		if isinstance(prediction, dict) and isinstance(prediction.get("predictions"), list):
			prediction = prediction["predictions"][0] if prediction["predictions"] else {}
		return prediction

	async def aclose(self) -> None:
		await self._client.aclose()


def _metric(record: Dict[str, Any], name: str) -> float:
	value = (record.get("metrics") or {}).get(name)
	return value if isinstance(value, (int, float)) else 0


def _current_injuries(record: Dict[str, Any]) -> int:
	return len((record.get("injuries") or {}).get("current") or [])


def prepare_performance_features(records: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
	return {
		"performance_history": [
			{
				"endurance": _metric(r, "endurance"),
				"recovery": _metric(r, "recovery"),
				"painLevel": _metric(r, "painLevel"),
				"injuries": _current_injuries(r),
			}
			for r in records[:10]
		]
	}


def prepare_injury_features(records: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
	return {
		"injury_history": [
			{
				"painLevel": _metric(r, "painLevel"),
				"recovery": _metric(r, "recovery"),
				"sleep": _metric(r, "sleep"),
				"currentInjuries": _current_injuries(r),
			}
			for r in records[:5]
		]
	}


class PerformanceDeclineModel:
	def __init__(self, endpoint: VertexEndpoint) -> None:
		self.endpoint = endpoint

	async def predict(self, records: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
		raw = await self.endpoint.predict(
			[prepare_performance_features(records)],
			{"confidenceThreshold": 0.8, "maxPredictions": 1},
		)
		raw = raw or {}
		return {
			"riskScore": float(raw.get("risk_score") or 0),
			"confidenceScore": float(raw.get("confidence_score") or 0),
			"declineAreas": list(raw.get("decline_areas") or []),
			"timeFrame": raw.get("time_frame") or "unknown",
			"recommendations": list(raw.get("recommendations") or []),
		}


class InjuryRiskModel:
	def __init__(self, endpoint: VertexEndpoint) -> None:
		self.endpoint = endpoint

	async def predict(self, records: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
		raw = await self.endpoint.predict(
			[prepare_injury_features(records)],
			{"confidenceThreshold": 0.85, "maxPredictions": 1},
		)
		raw = raw or {}
		result: Dict[str, Any] = {
			"injuryRiskScore": float(raw.get("injury_risk_score") or 0),
			"primaryRiskAreas": list(raw.get("risk_areas") or []),
			"contributingFactors": list(raw.get("contributing_factors") or []),
			"preventionStrategies": list(raw.get("suggested_strategies") or []),
		}
		if raw.get("recovery_time"):
			result["timeUntilFullRecovery"] = int(float(raw["recovery_time"]))
		return result


BIOMETRIC_FEATURES = (
	("heartRate", "current"),
	("heartRate", "resting"),
	("heartRate", "variability"),
	("heartRate", "recoveryRate"),
	("sleep", "durationHours"),
	("sleep", "deepSleepPercentage"),
	("sleep", "remSleepPercentage"),
	("sleep", "sleepQualityScore"),
	(None, "stressLevel"),
	(None, "bloodOxygen"),
	(None, "respiratoryRate"),
)


def biometric_feature_vector(reading: Dict[str, Any]) -> List[float]:
	vector: List[float] = []
	for group, name in BIOMETRIC_FEATURES:
		source = (reading.get(group) or {}) if group else reading
		value = source.get(name)
		vector.append(float(value) if isinstance(value, (int, float)) else 0.0)
	return vector


class FatigueModel:
	"""LSTM fatigue model; returns ``[fatigue_score (0-1), recovery_probability, confidence]``."""

	def __init__(self, endpoint: VertexEndpoint) -> None:
		self.endpoint = endpoint

	async def predict(self, time_series: Sequence[Dict[str, Any]], baseline: Optional[Dict[str, Any]] = None) -> List[float]:
		instance: Dict[str, Any] = {"sequence": [biometric_feature_vector(r) for r in time_series]}
		if baseline is not None:
			instance["baseline"] = biometric_feature_vector(baseline)
		raw = await self.endpoint.predict([instance])
		if not isinstance(raw, list) or len(raw) < 3:
			raise RuntimeError(f"Unexpected fatigue model output: {raw!r}")
		return [float(v) for v in raw[:3]]
