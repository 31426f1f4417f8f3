"""
FastAPI dependencies handing the application's services to route handlers.
"""

from fastapi import Request

from api.config import APIConfig
from api.database import BookStore
from api.tokens import TokenService
from api.users import CredentialStore


def get_config(request: Request) -> APIConfig:
    return request.app.state.config


def get_book_store(request: Request) -> BookStore:
    return request.app.state.book_store


def get_credential_store(request: Request) -> CredentialStore:
    return request.app.state.credential_store


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service
