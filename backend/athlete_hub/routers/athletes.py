from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..db import get_db
from ..errors import ApiError, DependencyError, NotFoundError, ValidationError
from ..models import Athlete

router = APIRouter(prefix="/athletes", tags=["athletes"])

logger = logging.getLogger(__name__)


class CreateAthleteRequest(BaseModel):
	name: Optional[str] = None
	sport: Optional[str] = None
	profile: Dict[str, Any] = Field(default_factory=dict)


@router.post("", status_code=201)
async def create_athlete(req: CreateAthleteRequest, db: Session = Depends(get_db)):
	name = (req.name or "").strip()
	sport = (req.sport or "").strip()
	if not name or not sport:
		raise ValidationError("name and sport are required")
	try:
		athlete = Athlete(name=name, sport=sport, profile=req.profile, connected_devices=[])
		db.add(athlete)
		db.commit()
		return {"success": True, "athlete": athlete.to_dict()}
	except Exception as e:
		db.rollback()
		logger.exception("Error creating athlete")
		raise DependencyError("Failed to create athlete") from e


@router.get("/{athlete_id}")
async def get_athlete(athlete_id: str, db: Session = Depends(get_db)):
	try:
		athlete = db.get(Athlete, athlete_id)
		if athlete is None:
			raise NotFoundError("Athlete not found")
		return {"success": True, "athlete": athlete.to_dict()}
	except ApiError:
		raise
	except Exception as e:
		logger.exception("Error loading athlete")
		raise DependencyError("Failed to load athlete") from e
