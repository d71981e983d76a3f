from __future__ import annotations
from collections import Counter
from typing import Any, Dict, List, Sequence


EXERCISE_RECOMMENDATIONS: Dict[str, str] = {
	"squat": "Practice squats with a focus on proper depth and knee tracking",
	"pushup": "Work on core engagement during pushups to maintain proper alignment",
	"lunge": "Practice slow, controlled lunges focusing on knee position",
}

# sport -> (general recommendation, body-part keyword, targeted recommendation)
SPORT_RECOMMENDATIONS: Dict[str, tuple] = {
	"cricket": (
		"Include rotational core exercises to improve bowling/batting power",
		"shoulder",
		"Focus on shoulder mobility work to prevent injury during throwing",
	),
	"football": (
		"Add explosive plyometric training to improve sprint acceleration",
		"knee",
		"Strengthen VMO muscles to improve knee stability during cutting movements",
	),
	"basketball": (
		"Implement jump landing mechanics drills to reduce injury risk",
		"ankle",
		"Add ankle stability exercises to prevent sprains during quick direction changes",
	),
	"badminton": (
		"Focus on single-leg stability exercises to improve court coverage",
		"shoulder",
		"Include rotator cuff strengthening to prevent shoulder overuse injuries",
	),
}
SPORT_RECOMMENDATIONS["soccer"] = SPORT_RECOMMENDATIONS["football"]


def sport_recommendations(exercise_type: str, sport: str, improvement_areas: Sequence[str]) -> List[str]:
	recommendations: List[str] = []
	if exercise_type in EXERCISE_RECOMMENDATIONS:
		recommendations.append(EXERCISE_RECOMMENDATIONS[exercise_type])
	entry = SPORT_RECOMMENDATIONS.get(sport.lower())
	if entry:
		general, keyword, targeted = entry
		recommendations.append(general)
		if any(keyword in area for area in improvement_areas):
			recommendations.append(targeted)
	return recommendations


def _by_frequency(frames: Sequence[Dict[str, Any]], key: str) -> List[str]:
	# most_common keeps first-seen order among ties
	counts = Counter(frame.get(key) for frame in frames if frame.get(key))
	return [text for text, _ in counts.most_common()]


def summarize_frames(frames: Sequence[Dict[str, Any]], exercise_type: str, sport: str) -> Dict[str, Any]:
	"""Summarise pose frames that were already analysed on the client.

	Each frame may carry ``errorDetected``, ``postureFeedback`` and
	``techniqueFeedback``. The overall score is the share of error-free
	frames as a 0-100 integer; the two most frequent posture and technique
	messages become improvement areas.
	"""
	if not frames:
		raise ValueError("at least one frame is required")
	error_rate = sum(1 for frame in frames if frame.get("errorDetected")) / len(frames)
	overall_score = max(0, min(100, round(100 - error_rate * 100)))

	posture = _by_frequency(frames, "postureFeedback")
	technique = _by_frequency(frames, "techniqueFeedback")

	strengths: List[str] = []
	improvement_areas: List[str] = []
	if error_rate < 0.2:
		strengths.append("Consistent form throughout the exercise")
	if not posture:
		strengths.append("Excellent posture maintained")
	else:
		improvement_areas.extend(posture[:2])
	if not technique:
		strengths.append("Proper technique demonstrated")
	else:
		improvement_areas.extend(technique[:2])

	return {
		"overallScore": overall_score,
		"strengths": strengths,
		"improvementAreas": improvement_areas,
		"recommendations": sport_recommendations(exercise_type, sport, improvement_areas),
	}
