import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .db import get_database
from .errors import register_error_handlers
from .settings import settings
from .routers import athletes
from .routers import career_advisor
from .routers import performance
from .routers import wearables
from .routers import video_analysis
from .routers import biometrics

logging.basicConfig(
	level=settings.log_level.upper(),
	format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Athlete Hub API")
app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.cors_origins,
	allow_methods=["GET", "POST", "OPTIONS"],
	allow_headers=["Content-Type", "Authorization"],
)
register_error_handlers(app)

app.include_router(athletes.router)
app.include_router(career_advisor.router)
app.include_router(performance.router)
app.include_router(wearables.router)
app.include_router(video_analysis.router)
app.include_router(biometrics.router)

@app.get("/info")
def root():
	return {
		"status": "ok",
		"gemini_configured": bool(settings.gemini_api_key),
		"vertex_configured": bool(settings.vertex_api_key),
	}

@app.on_event("shutdown")
async def shutdown_event():
	# The engine is created lazily by the first request that needs it
	get_database().dispose()
