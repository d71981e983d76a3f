from __future__ import annotations
import logging
from datetime import datetime, timedelta
from typing import Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import get_performance_models
from ..errors import ApiError, DependencyError, NotFoundError, ValidationError
from ..models import PerformanceData

router = APIRouter(prefix="/performance-prediction", tags=["performance"])

logger = logging.getLogger(__name__)


class PerformancePredictionRequest(BaseModel):
	athleteId: Optional[str] = None
	includePreviousDays: int = Field(default=30, ge=0, le=3650)


@router.post("")
async def performance_prediction(
	req: PerformancePredictionRequest,
	db: Session = Depends(get_db),
	models: Dict[str, object] = Depends(get_performance_models),
):
	if not req.athleteId:
		raise ValidationError("Athlete ID is required")
	try:
		end_date = datetime.utcnow()
		start_date = end_date - timedelta(days=req.includePreviousDays)
		rows = (
			db.query(PerformanceData)
			.filter(
				PerformanceData.athlete_id == req.athleteId,
				PerformanceData.date >= start_date,
				PerformanceData.date <= end_date,
			)
			.order_by(PerformanceData.date.desc())
			.all()
		)
		if not rows:
			raise NotFoundError("No performance data found for this athlete")
		records = [row.to_dict() for row in rows]

		performance = await models["performance"].predict(records)
		injury_risk = await models["injuryRisk"].predict(records)

		return {
			"success": True,
			"predictions": {
				"performance": performance,
				"injuryRisk": injury_risk,
			},
			"dataPoints": len(records),
			"dateRange": {
				"start": start_date.isoformat(),
				"end": end_date.isoformat(),
			},
		}
	except ApiError:
		raise
	except Exception as e:
		logger.exception("Performance prediction error")
		raise DependencyError("Failed to generate performance prediction") from e
