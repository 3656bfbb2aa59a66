from __future__ import annotations

from fastapi import APIRouter

from .endpoints import chat, clients, health

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(chat.router, prefix="/chat", tags=["chat"])
api_router.include_router(clients.router, prefix="/clients", tags=["clients"])
