"""HTTP API layer for Flowise AI SDK.

This module provides FastAPI integration for the SDK:

    from fastapi import FastAPI
    from flowise_ai_sdk.http.api import router

    app = FastAPI()
    app.include_router(router)
"""
