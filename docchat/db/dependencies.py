"""Request dependencies exposing the objects built once in ``create_app``."""
from fastapi import Depends, Request

from docchat.core.config import Settings
from docchat.db.storage import MemStorage
from docchat.services.chat_service import ChatService, CompletionClient
from docchat.services.document_service import DocumentService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> MemStorage:
    return request.app.state.storage


def get_completion_client(request: Request) -> CompletionClient:
    return request.app.state.completion_client


def get_chat_service(
    storage: MemStorage = Depends(get_storage),
    completion_client: CompletionClient = Depends(get_completion_client),
) -> ChatService:
    return ChatService(storage, completion_client)


def get_document_service(
    storage: MemStorage = Depends(get_storage),
    chat_service: ChatService = Depends(get_chat_service),
    settings: Settings = Depends(get_settings),
) -> DocumentService:
    return DocumentService(storage, chat_service, settings.MAX_UPLOAD_SIZE)
