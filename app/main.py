# main.py

"""
Application entry point for the Sirahpidea Study Buddy API.

This module initializes the FastAPI application, configures logging,
registers all routers, and provides a root endpoint. It can be run directly
with Uvicorn for local development or deployed via ASGI servers in production.
"""

import logging

# Config imports
from config import settings

# FASTAPI imports
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# APP Router imports
from app.routers.health import router as health_router
from app.routers.study import router as study_router
from app.routers.chat import router as chat_router
from app.routers.preferences import router as preferences_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(
    title="Sirahpidea Study Buddy",
    description=(
        "AI-powered study companion that generates summaries, quizzes,"
        " timelines and flashcards for a topic, and answers follow-up"
        " questions about it."
    ),
    version="1.0"
)

# CORS Middleware configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.UI_HOST],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Router Registration
app.include_router(health_router)
app.include_router(study_router)
app.include_router(chat_router)
app.include_router(preferences_router)


@app.get("/")
def home() -> dict[str, str]:
    """
    Root Endpoint for the API.

    Returns:
        dict[str, str]: A simple JSON message confirming the server
        is running and accessible.
    """
    return {
        "message": (
            "Hello, World! "
            "The Sirahpidea Study Buddy server is live with FastAPI."
        )
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.APP_PORT)
