# routes.py
from fastapi import FastAPI
from controller.airdrop_controller import airdrop_router
from controller.fingerprint_controller import fingerprint_router


def register_routes(app: FastAPI) -> None:
    """Register & Access control controllers here."""
    app.include_router(airdrop_router)
    app.include_router(fingerprint_router)
