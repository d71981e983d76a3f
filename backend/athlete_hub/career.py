from __future__ import annotations
import math
import re
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class SkillScores(BaseModel):
	technical: int = Field(ge=0, le=100)
	tactical: int = Field(ge=0, le=100)
	physical: int = Field(ge=0, le=100)
	mental: int = Field(ge=0, le=100)


class Education(BaseModel):
	level: str
	sportsRelated: bool = False


class InjuryHistory(BaseModel):
	hasMajorInjury: bool = False
	recoveryStatus: float = Field(default=100, ge=0, le=100)


class FinancialGoals(BaseModel):
	expectedIncome: str
	investmentCapacity: bool = False


class CareerFormData(BaseModel):
	currentSport: str
	yearsExperience: float = Field(ge=0)
	age: int = Field(gt=0)
	achievements: List[str] = Field(default_factory=list)
	skills: SkillScores
	education: Education
	# coaching, management, analytics, media, business
	preferences: Dict[str, bool] = Field(default_factory=dict)
	injuryHistory: InjuryHistory
	financialGoals: FinancialGoals


def _yes_no(flag: bool) -> str:
	return "Yes" if flag else "No"


def _format_number(value: float) -> str:
	return str(int(value)) if float(value).is_integer() else str(value)


def render_athlete_profile(form: CareerFormData) -> str:
	preferences = [
		f"- {key[:1].upper()}{key[1:]}" for key, selected in form.preferences.items() if selected
	]
	lines = [
		"Athlete Profile:",
		f"- Current Sport: {form.currentSport}",
		f"- Years of Experience: {_format_number(form.yearsExperience)}",
		f"- Age: {form.age}",
		"",
		"Skills Assessment:",
		f"- Technical: {form.skills.technical}/100",
		f"- Tactical: {form.skills.tactical}/100",
		f"- Physical: {form.skills.physical}/100",
		f"- Mental: {form.skills.mental}/100",
		"",
		"Career Preferences:",
		*preferences,
		"",
		"Education:",
		f"- Level: {form.education.level}",
		f"- Sports Related: {_yes_no(form.education.sportsRelated)}",
		"",
		"Injury History:",
		f"- Major Injury: {_yes_no(form.injuryHistory.hasMajorInjury)}",
		f"- Recovery Status: {_format_number(form.injuryHistory.recoveryStatus)}%",
		"",
		"Financial Goals:",
		f"- Expected Income Level: {form.financialGoals.expectedIncome}",
		f"- Investment Capacity: {_yes_no(form.financialGoals.investmentCapacity)}",
	]
	return "\n".join(lines)


def build_career_prompt(form: CareerFormData) -> str:
	return (
		"As a career advisor for athletes, analyze the following profile and provide:\n"
		"1. Top 3 recommended career paths with likelihood of success\n"
		"2. Key skills to develop for each path\n"
		"3. Potential challenges and mitigation strategies\n"
		"4. Timeline for transition\n"
		"5. Financial projections for each path\n\n"
		f"{render_athlete_profile(form)}\n\n"
		"Provide structured, actionable advice that considers all aspects of the athlete's profile.\n"
		"Focus on realistic paths that align with their skills, preferences, and market opportunities.\n\n"
		"Format each career path recommendation as its own block, separated by a blank line:\n"
		"CAREER: [title]\n"
		"LIKELIHOOD: [percentage]\n"
		"SKILLS: [required skills]\n"
		"CHALLENGES: [potential challenges]\n"
		"TIMELINE: [estimated timeline]\n"
		"FINANCIAL: [financial projections]"
	)


# Labels are matched case-sensitively and only up to the end of their line
_FIELD_PATTERNS = {
	"skills": re.compile(r"Skills:(.*?)(?=\n|$)"),
	"challenges": re.compile(r"Challenges:(.*?)(?=\n|$)"),
	"timeline": re.compile(r"Timeline:(.*?)(?=\n|$)"),
	"financials": re.compile(r"Financials?:(.*?)(?=\n|$)"),
}


def extract_career_paths(advice: str) -> List[Dict[str, str]]:
	"""Best-effort extraction of "career path" sections from free text.

	Sections are blank-line separated; a section qualifies when it contains
	the substring ``career path``. The title is the section's first line and
	each labelled field captures the rest of its line, or ``""``.
	"""
	paths: List[Dict[str, str]] = []
	for section in advice.split("\n\n"):
		if "career path" not in section:
			continue
		path = {"title": section.split("\n")[0].strip()}
		for field, pattern in _FIELD_PATTERNS.items():
			match = pattern.search(section)
			path[field] = match.group(1).strip() if match else ""
		paths.append(path)
	return paths


_TAGS = {
	"CAREER": "title",
	"LIKELIHOOD": "likelihood",
	"SKILLS": "skills",
	"CHALLENGES": "challenges",
	"TIMELINE": "timeline",
	"FINANCIAL": "financials",
}
_TAG_LINE = re.compile(r"^\s*\**\s*(CAREER|LIKELIHOOD|SKILLS|CHALLENGES|TIMELINE|FINANCIAL)\s*\**\s*:\s*\**\s*(.*)$")


def _parse_likelihood(value: str) -> int:
	match = re.search(r"\d+(?:\.\d+)?", value)
	if not match:
		return 0
	percent = float(match.group(0))
	# Overlong digit runs parse to inf
	if not math.isfinite(percent):
		return 0
	return int(round(max(0.0, min(100.0, percent))))


def parse_tagged_career_paths(advice: str) -> List[Dict[str, object]]:
	"""Parse the tagged ``CAREER:`` blocks the prompt asks the model for.

	A block starts at each ``CAREER:`` line; tags may be wrapped in markdown
	bold. Blocks without a title are dropped.
	"""
	paths: List[Dict[str, object]] = []
	current: Optional[Dict[str, object]] = None
	for line in advice.splitlines():
		match = _TAG_LINE.match(line)
		if not match:
			continue
		tag, value = match.group(1), match.group(2).strip().rstrip("*").strip()
		if tag == "CAREER":
			current = {"title": value, "likelihood": 0, "skills": "", "challenges": "", "timeline": "", "financials": ""}
			paths.append(current)
			continue
		if current is None:
			continue
		if tag == "LIKELIHOOD":
			current["likelihood"] = _parse_likelihood(value)
		else:
			current[_TAGS[tag]] = value
	return [p for p in paths if p["title"]]
