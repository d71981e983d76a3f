from __future__ import annotations
from typing import AsyncIterator, Dict

import httpx
from fastapi import Depends
from sqlalchemy.orm import Session

from .db import get_db
from .gemini_client import GeminiClient
from .settings import settings
from .vertex_client import FatigueModel, InjuryRiskModel, PerformanceDeclineModel, VertexEndpoint
from .wearables import WearableService


async def get_text_generator() -> AsyncIterator[GeminiClient]:
	client = GeminiClient()
	try:
		yield client
	finally:
		await client.aclose()


async def get_performance_models() -> AsyncIterator[Dict[str, object]]:
	async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as http:
		yield {
			"performance": PerformanceDeclineModel(VertexEndpoint(settings.performance_endpoint, client=http)),
			"injuryRisk": InjuryRiskModel(VertexEndpoint(settings.injury_endpoint, client=http)),
		}


async def get_fatigue_model() -> AsyncIterator[FatigueModel]:
	async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as http:
		yield FatigueModel(VertexEndpoint(settings.fatigue_endpoint, client=http))


def get_wearable_service(db: Session = Depends(get_db)) -> WearableService:
	return WearableService(db)
