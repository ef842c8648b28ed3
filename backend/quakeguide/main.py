"""FastAPI application entry point.

Configures CORS middleware and registers the chat and knowledge API
routers under the /api prefix. Health check at GET /.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import chat_routes, knowledge_routes
from .core.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title=settings.app_name)

origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(chat_routes.router, prefix="/api")
app.include_router(knowledge_routes.router, prefix="/api")


@app.get("/")
async def root():
    return {"message": "Service is running"}
