from __future__ import annotations
import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..biometrics import DEFAULT_FATIGUE_PREDICTION, BiometricData, analyze_recovery_status, analyze_sleep_quality, interpret_fatigue_output
from ..db import get_db
from ..deps import get_fatigue_model
from ..errors import DependencyError, ValidationError
from ..models import BiometricStatus
from ..vertex_client import FatigueModel

router = APIRouter(prefix="/biometric-fatigue", tags=["biometrics"])

logger = logging.getLogger(__name__)

HISTORY_LENGTH = 10
BASELINE_WINDOW = timedelta(days=30)


class BiometricRequest(BaseModel):
	athleteId: Optional[str] = None
	biometricData: Optional[BiometricData] = None
	deviceType: str = "unknown"


async def _predict_fatigue(model: FatigueModel, time_series, baseline) -> Dict[str, Any]:
	try:
		return interpret_fatigue_output(await model.predict(time_series, baseline))
	except Exception:
		logger.warning("Fatigue model unavailable, using default prediction", exc_info=True)
		return dict(DEFAULT_FATIGUE_PREDICTION)


@router.post("")
async def biometric_fatigue(
	req: BiometricRequest,
	db: Session = Depends(get_db),
	model: FatigueModel = Depends(get_fatigue_model),
):
	reading = req.biometricData.model_dump(exclude_none=True) if req.biometricData is not None else {}
	if not req.athleteId or not reading:
		raise ValidationError("Athlete ID and biometric data are required")
	try:
		previous = (
			db.query(BiometricStatus)
			.filter(BiometricStatus.athlete_id == req.athleteId)
			.order_by(BiometricStatus.timestamp.desc())
			.limit(HISTORY_LENGTH)
			.all()
		)
		time_series = [reading, *(row.reading for row in previous)]

		# Most recent well-rested reading in the window serves as the baseline
		baseline_row = (
			db.query(BiometricStatus)
			.filter(
				BiometricStatus.athlete_id == req.athleteId,
				BiometricStatus.fatigue_risk == "low",
				BiometricStatus.timestamp >= datetime.utcnow() - BASELINE_WINDOW,
			)
			.order_by(BiometricStatus.timestamp.desc())
			.first()
		)
		baseline = baseline_row.reading if baseline_row is not None else None

		fatigue = await _predict_fatigue(model, time_series, baseline)
		sleep = analyze_sleep_quality(reading.get("sleep"))
		recovery = analyze_recovery_status(
			reading.get("heartRate"),
			(baseline or {}).get("heartRate"),
		)

		status = BiometricStatus(
			athlete_id=req.athleteId,
			timestamp=datetime.utcnow(),
			device_type=req.deviceType,
			reading=reading,
			predictions=fatigue,
			fatigue_risk=fatigue["fatigueRisk"],
		)
		db.add(status)
		db.commit()
		return {
			"success": True,
			"biometricStatus": {
				"id": status.id,
				"athleteId": status.athlete_id,
				"timestamp": status.timestamp.isoformat(),
				"predictions": status.predictions,
			},
			"analyses": {
				"sleep": sleep,
				"recovery": recovery,
			},
		}
	except Exception as e:
		db.rollback()
		logger.exception("Biometric fatigue prediction error")
		raise DependencyError("Failed to analyze biometric data") from e
