"""
Tests for pose-frame summaries and the /video-analysis endpoints.
"""

import pytest

from athlete_hub.models import VideoAnalysis
from athlete_hub.video import sport_recommendations, summarize_frames

from conftest import count_rows


GOOD = {"errorDetected": False}
DEEPEN = {"errorDetected": True, "techniqueFeedback": "Deepen your squat by bending knees further"}
UPRIGHT = {"errorDetected": True, "postureFeedback": "Maintain more upright torso position"}


class TestSummarizeFrames:
	def test_clean_frames(self):
		summary = summarize_frames([GOOD] * 10, "squat", "Cricket")
		assert summary["overallScore"] == 100
		assert summary["strengths"] == [
			"Consistent form throughout the exercise",
			"Excellent posture maintained",
			"Proper technique demonstrated",
		]
		assert summary["improvementAreas"] == []
		assert summary["recommendations"] == [
			"Practice squats with a focus on proper depth and knee tracking",
			"Include rotational core exercises to improve bowling/batting power",
		]

	def test_feedback_ranked_by_frequency(self):
		frames = [UPRIGHT, DEEPEN, DEEPEN, GOOD]
		summary = summarize_frames(frames, "squat", "football")
		assert summary["overallScore"] == 25
		assert summary["strengths"] == []
		assert summary["improvementAreas"] == [
			"Maintain more upright torso position",
			"Deepen your squat by bending knees further",
		]
		# "knees" in an improvement area triggers the targeted football advice
		assert "Strengthen VMO muscles to improve knee stability during cutting movements" in summary["recommendations"]

	def test_at_most_two_messages_per_kind(self):
		frames = [{"errorDetected": True, "techniqueFeedback": f"fix {i}"} for i in range(4)]
		assert len(summarize_frames(frames, "lunge", "tennis")["improvementAreas"]) == 2

	def test_empty_frames_rejected(self):
		with pytest.raises(ValueError):
			summarize_frames([], "squat", "cricket")

	def test_soccer_shares_football_advice(self):
		assert sport_recommendations("plank", "Soccer", []) == ["Add explosive plyometric training to improve sprint acceleration"]


BODY = {
	"athleteId": "a1",
	"frames": [GOOD, DEEPEN],
	"videoUrl": "https://cdn.test/v.mp4",
	"exerciseType": "squat",
	"sport": "cricket",
	"duration": 4,
}


class TestVideoAnalysisEndpoints:
	def test_post_then_get_by_video_id(self, client, database):
		response = client.post("/video-analysis", json=BODY)
		assert response.status_code == 200
		analysis = response.json()["videoAnalysis"]
		assert analysis["overallScore"] == 50
		assert count_rows(database, VideoAnalysis) == 1
		with database.session() as s:
			row = s.query(VideoAnalysis).one()
			assert row.processing_metrics["averageFps"] == 0.5
			assert row.frame_count == 2

		fetched = client.get("/video-analysis", params={"videoId": analysis["videoId"]})
		assert fetched.status_code == 200
		assert fetched.json()["videoAnalysis"]["summary"]["overallScore"] == 50

	def test_missing_fields_is_400(self, client, database):
		response = client.post("/video-analysis", json=dict(BODY, frames=[]))
		assert response.status_code == 400
		assert count_rows(database, VideoAnalysis) == 0

	def test_get_requires_an_identifier(self, client):
		assert client.get("/video-analysis").status_code == 400

	def test_unknown_video_is_404(self, client):
		assert client.get("/video-analysis", params={"videoId": "nope"}).status_code == 404

	def test_list_is_paginated(self, client):
		for _ in range(3):
			client.post("/video-analysis", json=BODY)
		response = client.get("/video-analysis", params={"athleteId": "a1", "page": 2, "limit": 2})
		data = response.json()
		assert len(data["videoAnalyses"]) == 1
		assert data["pagination"] == {"total": 3, "page": 2, "limit": 2, "pages": 2}
