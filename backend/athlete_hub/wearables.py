from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from .models import Athlete, BiometricStatus, public_device


logger = logging.getLogger(__name__)

SUPPORTED_DEVICE_TYPES = ("fitbit", "garmin", "apple_watch", "whoop", "polar", "oura", "samsung_watch", "generic")


class WearableService:
	"""Device registry backed by the athlete documents and stored biometric readings.

	Vendor protocols are not spoken here; a device counts as connected once
	its configuration is accepted and recorded on the athlete.
	"""

	def __init__(self, db: Session, *, readings_limit: int = 10) -> None:
		self.db = db
		self.readings_limit = readings_limit

	async def connect_device(self, athlete_id: str, device_config: Dict[str, Any]) -> bool:
		device_type = str(device_config.get("type") or "").lower()
		device_id = device_config.get("deviceId")
		if device_type not in SUPPORTED_DEVICE_TYPES:
			logger.info("Refusing device for athlete %s: unsupported type %r", athlete_id, device_type)
			return False
		if not device_id:
			logger.info("Refusing device for athlete %s: missing deviceId", athlete_id)
			return False
		athlete = self.db.get(Athlete, athlete_id)
		if athlete is None:
			return False
		if any(d.get("deviceId") == device_id for d in athlete.connected_devices or []):
			logger.info("Device %s already connected for athlete %s", device_id, athlete_id)
			return False
		return True

	async def get_data(self, athlete_id: str) -> Optional[Dict[str, Any]]:
		athlete = self.db.get(Athlete, athlete_id)
		if athlete is None or not athlete.connected_devices:
			return None
		readings = (
			self.db.query(BiometricStatus)
			.filter(BiometricStatus.athlete_id == athlete_id)
			.order_by(BiometricStatus.timestamp.desc())
			.limit(self.readings_limit)
			.all()
		)
		return {
			"devices": [public_device(d) for d in athlete.connected_devices],
			"latest": readings[0].to_dict() if readings else None,
			"readings": [r.to_dict() for r in readings],
		}
