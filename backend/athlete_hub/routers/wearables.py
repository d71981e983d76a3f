from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import get_wearable_service
from ..errors import ApiError, DependencyError, NotFoundError, ValidationError
from ..models import Athlete
from ..wearables import WearableService

router = APIRouter(prefix="/wearables", tags=["wearables"])

logger = logging.getLogger(__name__)


class ConnectDeviceRequest(BaseModel):
	athleteId: Optional[str] = None
	deviceConfig: Optional[Dict[str, Any]] = None


@router.post("")
async def connect_device(
	req: ConnectDeviceRequest,
	db: Session = Depends(get_db),
	service: WearableService = Depends(get_wearable_service),
):
	if not req.athleteId or not req.deviceConfig:
		raise ValidationError("Athlete ID and device configuration are required")
	try:
		athlete = db.get(Athlete, req.athleteId)
		if athlete is None:
			raise NotFoundError("Athlete not found")

		connected = await service.connect_device(athlete.id, req.deviceConfig)
		if not connected:
			raise ValidationError("Failed to connect device")

		# New list so the JSON column is flagged as modified
		athlete.connected_devices = [*(athlete.connected_devices or []), req.deviceConfig]
		db.add(athlete)
		db.commit()
		logger.info("Device %s connected for athlete %s", req.deviceConfig.get("deviceId"), athlete.id)
		return {"success": True, "message": "Device connected successfully"}
	except ApiError:
		raise
	except Exception as e:
		db.rollback()
		logger.exception("Error connecting wearable")
		raise DependencyError("Failed to connect wearable device") from e


@router.get("")
async def wearable_data(
	athleteId: Optional[str] = None,
	service: WearableService = Depends(get_wearable_service),
):
	if not athleteId:
		raise ValidationError("Athlete ID is required")
	try:
		data = await service.get_data(athleteId)
		if not data:
			raise NotFoundError("No wearable data found")
		return {"success": True, "data": data}
	except ApiError:
		raise
	except Exception as e:
		logger.exception("Error getting wearable data")
		raise DependencyError("Failed to get wearable data") from e
