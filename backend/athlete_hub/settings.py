from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field

class Settings(BaseSettings):
	gemini_api_key: str | None = Field(default=None, validation_alias=AliasChoices("GEMINI_API_KEY", "GOOGLE_AI_STUDIO_KEY"))
	# Provider can be "vertex" (Vertex AI Express) or "ai_studio" (Generative Language API)
	gemini_provider: str = Field(default="ai_studio", validation_alias="GEMINI_PROVIDER")
	gemini_model: str = Field(default="gemini-2.5-flash", validation_alias="GEMINI_MODEL")

	# Vertex configuration, shared by Gemini-on-Vertex and the tabular prediction endpoints
	vertex_region: str = Field(default="asia-south1", validation_alias="VERTEX_REGION")
	vertex_project: str = Field(default="athlete-management-system", validation_alias="VERTEX_PROJECT")
	vertex_api_key: str | None = Field(default=None, validation_alias="VERTEX_API_KEY")
	performance_endpoint: str = Field(default="athlete-performance-predictor", validation_alias="VERTEX_PERFORMANCE_ENDPOINT")
	injury_endpoint: str = Field(default="athlete-injury-risk-analyzer", validation_alias="VERTEX_INJURY_ENDPOINT")
	fatigue_endpoint: str = Field(default="athlete-fatigue-lstm", validation_alias="VERTEX_FATIGUE_ENDPOINT")

	http_timeout_seconds: float = Field(default=30, validation_alias="HTTP_TIMEOUT_SECONDS")

	# Database
	database_url: str = Field(default="sqlite:///./athlete_hub.db", validation_alias="DATABASE_URL")

	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
	cors_origins: List[str] = Field(default=["http://localhost:3000"], validation_alias="CORS_ORIGINS")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
