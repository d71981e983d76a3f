from __future__ import annotations
import logging
import math
import uuid
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..db import get_db
from ..errors import ApiError, DependencyError, NotFoundError, ValidationError
from ..models import VideoAnalysis
from ..video import summarize_frames

router = APIRouter(prefix="/video-analysis", tags=["video"])

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ["athleteId", "frames", "videoUrl", "exerciseType", "sport"]


class VideoAnalysisRequest(BaseModel):
	athleteId: Optional[str] = None
	frames: Optional[List[Dict[str, Any]]] = None
	videoUrl: Optional[str] = None
	exerciseType: Optional[str] = None
	sport: Optional[str] = None
	duration: Optional[float] = None
	processingMetrics: Optional[Dict[str, Any]] = None


@router.post("")
async def analyze_video(req: VideoAnalysisRequest, db: Session = Depends(get_db)):
	if not all(getattr(req, field) for field in REQUIRED_FIELDS):
		raise ValidationError("Required fields missing: " + ", ".join(REQUIRED_FIELDS))
	try:
		summary = summarize_frames(req.frames, req.exerciseType, req.sport)
		duration = req.duration or 0
		metrics = req.processingMetrics or {
			"processingTimeMs": 0,
			"framesProcessed": len(req.frames),
			"averageFps": len(req.frames) / duration if duration else 0,
			"deviceType": "server",
		}
		analysis = VideoAnalysis(
			athlete_id=req.athleteId,
			video_id=str(uuid.uuid4()),
			video_url=req.videoUrl,
			exercise_type=req.exerciseType,
			sport=req.sport,
			duration=duration,
			analysis_complete=True,
			frames=req.frames,
			frame_count=len(req.frames),
			summary=summary,
			processing_metrics=metrics,
		)
		db.add(analysis)
		db.commit()
		return {
			"success": True,
			"videoAnalysis": {
				"id": analysis.id,
				"videoId": analysis.video_id,
				**summary,
			},
		}
	except Exception as e:
		db.rollback()
		logger.exception("Video analysis error")
		raise DependencyError("Failed to analyze video") from e


@router.get("")
async def get_video_analysis(
	videoId: Optional[str] = None,
	athleteId: Optional[str] = None,
	page: int = Query(default=1, ge=1),
	limit: int = Query(default=10, ge=1, le=100),
	db: Session = Depends(get_db),
):
	if not videoId and not athleteId:
		raise ValidationError("Either videoId or athleteId is required")
	try:
		if videoId:
			analysis = db.query(VideoAnalysis).filter(VideoAnalysis.video_id == videoId).first()
			if analysis is None:
				raise NotFoundError("Video analysis not found")
			return {"success": True, "videoAnalysis": analysis.to_dict()}

		query = db.query(VideoAnalysis).filter(VideoAnalysis.athlete_id == athleteId)
		total = query.count()
		rows = (
			query.order_by(VideoAnalysis.created_at.desc())
			.offset((page - 1) * limit)
			.limit(limit)
			.all()
		)
		return {
			"success": True,
			"videoAnalyses": [row.to_dict() for row in rows],
			"pagination": {
				"total": total,
				"page": page,
				"limit": limit,
				"pages": math.ceil(total / limit),
			},
		}
	except ApiError:
		raise
	except Exception as e:
		logger.exception("Get video analysis error")
		raise DependencyError("Failed to retrieve video analysis") from e
