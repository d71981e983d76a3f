"""
Tests for the career advice prompt, extraction and the /career-advisor endpoint.
"""

import pytest

from athlete_hub.career import (
	CareerFormData,
	build_career_prompt,
	extract_career_paths,
	parse_tagged_career_paths,
	render_athlete_profile,
)
from athlete_hub.models import CareerPrediction

from conftest import count_rows


FORM = {
	"currentSport": "Cricket",
	"yearsExperience": 8,
	"age": 27,
	"skills": {"technical": 80, "tactical": 70, "physical": 65, "mental": 90},
	"education": {"level": "Bachelor", "sportsRelated": True},
	"preferences": {"coaching": True, "management": False, "analytics": True, "media": False, "business": False},
	"injuryHistory": {"hasMajorInjury": False, "recoveryStatus": 100},
	"financialGoals": {"expectedIncome": "high", "investmentCapacity": True},
}

TAGGED_ADVICE = (
	"Here are my recommendations.\n\n"
	"CAREER: Cricket Coach\n"
	"LIKELIHOOD: 85%\n"
	"SKILLS: Coaching certification, communication\n"
	"CHALLENGES: Building a track record\n"
	"TIMELINE: 1-2 years\n"
	"FINANCIAL: Moderate income growing with reputation\n\n"
	"**CAREER:** Performance Analyst\n"
	"**LIKELIHOOD:** 60\n"
	"**SKILLS:** Data analysis"
)


class TestExtractCareerPaths:
	def test_documented_example(self):
		text = "Intro\n\nBest career path: Coaching\nSkills: Leadership\nTimeline: 2 years"
		assert extract_career_paths(text) == [{
			"title": "Best career path: Coaching",
			"skills": "Leadership",
			"challenges": "",
			"timeline": "2 years",
			"financials": "",
		}]

	def test_no_career_path_section_yields_empty_list(self):
		assert extract_career_paths("Intro\n\nSome advice\nSkills: Leadership") == []

	def test_match_is_case_sensitive(self):
		assert extract_career_paths("Career Path: Media\nSkills: Speaking") == []

	def test_idempotent(self):
		text = "A career path: Media\nChallenges: Visibility\nFinancial: Variable\n\nAnother career path\nSkills: X"
		assert extract_career_paths(text) == extract_career_paths(text)
		assert len(extract_career_paths(text)) == 2

	def test_field_captures_only_its_line(self):
		paths = extract_career_paths("career path one\nSkills: A\nB on the next line")
		assert paths[0]["skills"] == "A"


class TestTaggedCareerPaths:
	def test_parses_blocks_with_likelihood(self):
		paths = parse_tagged_career_paths(TAGGED_ADVICE)
		assert [p["title"] for p in paths] == ["Cricket Coach", "Performance Analyst"]
		assert paths[0]["likelihood"] == 85
		assert paths[0]["financials"] == "Moderate income growing with reputation"
		assert paths[1]["likelihood"] == 60
		assert paths[1]["skills"] == "Data analysis"
		assert paths[1]["timeline"] == ""

	def test_untagged_text_yields_nothing(self):
		assert parse_tagged_career_paths("Best career path: Coaching\nSkills: Leadership") == []

	@pytest.mark.parametrize("value, expected", [
		("150%", 100),
		("72.6 percent", 73),
		("unknown", 0),
		("9" * 400, 0),
	])
	def test_likelihood_is_clamped_to_percent(self, value, expected):
		paths = parse_tagged_career_paths(f"CAREER: Coach\nLIKELIHOOD: {value}")
		assert paths[0]["likelihood"] == expected


class TestPrompt:
	def test_profile_lists_only_selected_preferences(self):
		profile = render_athlete_profile(CareerFormData(**FORM))
		assert "- Coaching" in profile
		assert "- Analytics" in profile
		assert "Management" not in profile
		assert "- Technical: 80/100" in profile
		assert "- Sports Related: Yes" in profile
		assert "- Recovery Status: 100%" in profile

	def test_prompt_requests_tagged_blocks(self):
		prompt = build_career_prompt(CareerFormData(**FORM))
		assert "CAREER: [title]" in prompt
		assert "- Current Sport: Cricket" in prompt


class TestCareerAdvisorEndpoint:
	def test_success_persists_one_record(self, client, database, generator, athlete_id):
		generator.text = TAGGED_ADVICE
		response = client.post("/career-advisor", json={"athleteId": athlete_id, "formData": FORM})
		assert response.status_code == 200
		data = response.json()
		assert data["success"] is True
		assert data["prediction"]["fullAdvice"] == TAGGED_ADVICE
		assert len(data["prediction"]["careerPaths"]) == 2
		assert count_rows(database, CareerPrediction) == 1
		with database.session() as s:
			row = s.get(CareerPrediction, data["prediction"]["predictionId"])
			assert row.advice == TAGGED_ADVICE
			assert row.athlete_id == athlete_id
			assert row.form_data["currentSport"] == "Cricket"

	def test_falls_back_to_career_path_sections(self, client, generator, athlete_id):
		generator.text = "Intro\n\nBest career path: Coaching\nSkills: Leadership\nTimeline: 2 years"
		response = client.post("/career-advisor", json={"athleteId": athlete_id, "formData": FORM})
		paths = response.json()["prediction"]["careerPaths"]
		assert paths == [{"title": "Best career path: Coaching", "skills": "Leadership", "challenges": "", "timeline": "2 years", "financials": ""}]

	def test_repeated_requests_create_separate_records(self, client, database, athlete_id):
		for _ in range(2):
			assert client.post("/career-advisor", json={"athleteId": athlete_id, "formData": FORM}).status_code == 200
		assert count_rows(database, CareerPrediction) == 2

	@pytest.mark.parametrize("body", [
		{},
		{"athleteId": "abc"},
		{"formData": FORM},
		{"athleteId": "", "formData": FORM},
	])
	def test_missing_input_is_400(self, client, database, generator, body):
		response = client.post("/career-advisor", json=body)
		assert response.status_code == 400
		assert response.json() == {"error": "Athlete ID and form data are required"}
		assert generator.prompts == []
		assert count_rows(database, CareerPrediction) == 0

	def test_malformed_form_is_400(self, client, database, athlete_id):
		bad = dict(FORM, skills={"technical": 150, "tactical": 70, "physical": 65, "mental": 90})
		response = client.post("/career-advisor", json={"athleteId": athlete_id, "formData": bad})
		assert response.status_code == 400
		assert count_rows(database, CareerPrediction) == 0

	def test_unknown_athlete_is_404(self, client, database, generator):
		response = client.post("/career-advisor", json={"athleteId": "missing", "formData": FORM})
		assert response.status_code == 404
		assert response.json() == {"error": "Athlete not found"}
		assert generator.prompts == []
		assert count_rows(database, CareerPrediction) == 0

	def test_generator_failure_is_generic_500(self, client, database, generator, athlete_id):
		generator.error = RuntimeError("quota exceeded for key sk-123")
		response = client.post("/career-advisor", json={"athleteId": athlete_id, "formData": FORM})
		assert response.status_code == 500
		assert response.json() == {"error": "Failed to generate career advice"}
		assert count_rows(database, CareerPrediction) == 0

	def test_overlong_likelihood_still_stores_one_record(self, client, database, generator, athlete_id):
		generator.text = "CAREER: Coach\nLIKELIHOOD: " + "9" * 400
		response = client.post("/career-advisor", json={"athleteId": athlete_id, "formData": FORM})
		assert response.status_code == 200
		paths = response.json()["prediction"]["careerPaths"]
		assert paths[0]["title"] == "Coach"
		assert paths[0]["likelihood"] == 0
		assert count_rows(database, CareerPrediction) == 1
