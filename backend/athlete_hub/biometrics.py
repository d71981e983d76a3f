from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict


# Returned when the fatigue model cannot be reached or answers garbage
DEFAULT_FATIGUE_PREDICTION: Dict[str, Any] = {
	"fatigueScore": 50,
	"fatigueRisk": "moderate",
	"recoveryNeeded": True,
	"alertGenerated": False,
	"confidenceScore": 0.79,
}


# Whole numbers are kept as ints
Number = Union[int, float]


class HeartRateData(BaseModel):
	model_config = ConfigDict(extra="allow")

	current: Optional[Number] = None
	resting: Optional[Number] = None
	variability: Optional[Number] = None
	recoveryRate: Optional[Number] = None


class SleepData(BaseModel):
	model_config = ConfigDict(extra="allow")

	durationHours: Optional[Number] = None
	deepSleepPercentage: Optional[Number] = None
	remSleepPercentage: Optional[Number] = None
	lightSleepPercentage: Optional[Number] = None
	sleepQualityScore: Optional[Number] = None
	wakePeriods: Optional[int] = None


class BiometricData(BaseModel):
	"""One wearable reading. Unknown keys (activity, device extras) are kept."""

	model_config = ConfigDict(extra="allow")

	heartRate: Optional[HeartRateData] = None
	sleep: Optional[SleepData] = None
	stressLevel: Optional[Number] = None
	bodyTemperature: Optional[Number] = None
	bloodOxygen: Optional[Number] = None
	hydrationLevel: Optional[Number] = None
	respiratoryRate: Optional[Number] = None


def _clamp(score: float) -> float:
	return max(0, min(100, score))


def fatigue_risk(score: int) -> str:
	if score > 70:
		return "high"
	if score > 40:
		return "moderate"
	return "low"


def recovery_hours(score: int) -> Optional[int]:
	if score > 60:
		return round((score - 40) / 5)
	return None


def interpret_fatigue_output(output: Sequence[float]) -> Dict[str, Any]:
	raw_score, recovery_probability, confidence = output[:3]
	score = round(raw_score * 100)
	prediction: Dict[str, Any] = {
		"fatigueScore": score,
		"fatigueRisk": fatigue_risk(score),
		"recoveryNeeded": recovery_probability > 0.5,
		"alertGenerated": score > 75,
		"confidenceScore": confidence,
	}
	hours = recovery_hours(score)
	if hours is not None:
		prediction["estimatedRecoveryTime"] = hours
	return prediction


def analyze_sleep_quality(sleep: Optional[Dict[str, Any]]) -> Dict[str, Any]:
	sleep = sleep or {}
	feedback: List[str] = []
	score: float = 50

	duration = sleep.get("durationHours")
	if duration:
		if duration < 7:
			score -= (7 - duration) * 10
			feedback.append(f"Sleep duration of {duration} hours is below recommended 7-9 hours")
		elif duration > 9:
			score -= (duration - 9) * 5
			feedback.append(f"Sleep duration of {duration} hours is above recommended range")
		else:
			score += 15
			feedback.append("Optimal sleep duration achieved")

	deep = sleep.get("deepSleepPercentage")
	if deep:
		if deep < 15:
			score -= (15 - deep) * 2
			feedback.append("Deep sleep percentage is below optimal range")
		elif deep > 25:
			score += 15
			feedback.append("Excellent deep sleep percentage")
		else:
			score += 10

	rem = sleep.get("remSleepPercentage")
	if rem:
		if rem < 20:
			score -= (20 - rem) * 1.5
			feedback.append("REM sleep percentage is below optimal range")
		elif rem > 30:
			score += 10
			feedback.append("Good REM sleep achieved")
		else:
			score += 7

	wake_periods = sleep.get("wakePeriods")
	if wake_periods is not None:
		if wake_periods > 3:
			score -= (wake_periods - 3) * 5
			feedback.append("Multiple wake periods detected, affecting sleep continuity")
		else:
			score += 8
			feedback.append("Minimal sleep disruptions detected")

	return {"qualityScore": _clamp(score), "feedbackItems": feedback}


def analyze_recovery_status(heart_rate: Optional[Dict[str, Any]], baseline: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
	heart_rate = heart_rate or {}
	baseline = baseline or {}
	feedback: List[str] = []
	score: float = 50

	current, resting = heart_rate.get("current"), heart_rate.get("resting")
	if current and resting:
		elevation = (current - resting) / resting * 100
		if elevation > 15:
			score -= elevation
			feedback.append(f"Heart rate is {elevation:.1f}% above resting level")
		else:
			score += 15
			feedback.append("Heart rate is close to resting level, indicating good recovery")

	hrv, baseline_hrv = heart_rate.get("variability"), baseline.get("variability")
	if hrv and baseline_hrv:
		hrv_pct = hrv / baseline_hrv * 100
		if hrv_pct < 80:
			score -= (80 - hrv_pct) * 0.5
			feedback.append("Heart rate variability is below your baseline, indicating incomplete recovery")
		else:
			score += 20
			feedback.append("Heart rate variability indicates good recovery status")

	rate = heart_rate.get("recoveryRate")
	if rate:
		if rate < 12:
			score -= (12 - rate) * 3
			feedback.append("Slow heart rate recovery detected")
		else:
			score += 15
			feedback.append("Good heart rate recovery rate")

	score = _clamp(score)
	return {"recoveryScore": score, "isRecovered": score > 65, "feedbackItems": feedback}
