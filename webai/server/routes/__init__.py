"""Route registration for the WebAI API."""

from fastapi import FastAPI

from .ask import router as ask_router


def register_routes(app: FastAPI):
    app.include_router(ask_router)
