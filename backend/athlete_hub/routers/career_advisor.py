from __future__ import annotations
import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..career import CareerFormData, build_career_prompt, extract_career_paths, parse_tagged_career_paths
from ..db import get_db
from ..deps import get_text_generator
from ..errors import ApiError, DependencyError, NotFoundError, ValidationError
from ..gemini_client import GeminiClient
from ..models import Athlete, CareerPrediction

router = APIRouter(prefix="/career-advisor", tags=["career"])

logger = logging.getLogger(__name__)


class CareerAdviceRequest(BaseModel):
	athleteId: Optional[str] = None
	formData: Optional[CareerFormData] = None


@router.post("")
async def career_advice(
	req: CareerAdviceRequest,
	db: Session = Depends(get_db),
	generator: GeminiClient = Depends(get_text_generator),
):
	if not req.athleteId or req.formData is None:
		raise ValidationError("Athlete ID and form data are required")
	try:
		athlete = db.get(Athlete, req.athleteId)
		if athlete is None:
			raise NotFoundError("Athlete not found")

		advice = await generator.generate(build_career_prompt(req.formData))
		career_paths = parse_tagged_career_paths(advice) or extract_career_paths(advice)

		# Persist only once the model has answered and its text has been parsed
		prediction = CareerPrediction(
			athlete_id=athlete.id,
			form_data=req.formData.model_dump(),
			advice=advice,
			created_at=datetime.utcnow(),
		)
		db.add(prediction)
		db.commit()
		logger.info("Career prediction %s stored for athlete %s (%d paths)", prediction.id, athlete.id, len(career_paths))
		return {
			"success": True,
			"prediction": {
				"careerPaths": career_paths,
				"fullAdvice": advice,
				"predictionId": prediction.id,
			},
		}
	except ApiError:
		raise
	except Exception as e:
		db.rollback()
		logger.exception("Career prediction error")
		raise DependencyError("Failed to generate career advice") from e
