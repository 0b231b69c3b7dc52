# routes.py
from fastapi import FastAPI
from controller.recognize_controller import recognize_router


def register_routes(app: FastAPI) -> None:
    """Register & Access control controllers here."""
    app.include_router(recognize_router)
