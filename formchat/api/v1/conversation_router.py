"""Form conversation API router."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from formchat.dependencies import get_conversation_service
from formchat.schemas.chat_schema import ConversationRequest, NextQuestionRequest
from formchat.schemas.conversation_schema import (
    ConversationListResponse,
    ConversationNameRequest,
    ConversationNameResponse,
    ConversationResponse,
)
from formchat.schemas.response_schema import (
    ApiResponse,
    ErrorResponse,
    success_response,
)
from formchat.services.conversation_service import ConversationService
from formchat.services.model_client import CompletionStream

router = APIRouter(
    prefix="/api/v1/forms/{form_id}",
    tags=["conversations"],
    responses={
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)

ConversationServiceDep = Annotated[
    ConversationService, Depends(get_conversation_service)
]


@router.post("/conversation/next-question", response_model=None)
async def next_question(
    request: NextQuestionRequest,
    service: ConversationServiceDep,
) -> StreamingResponse | dict:
    """Ask the model for the next question; streams plain text by default."""
    result = await service.get_next_question(request.messages, stream=request.stream)
    if isinstance(result, CompletionStream):
        return StreamingResponse(
            result,
            media_type="text/plain; charset=utf-8",
            headers={
                "Cache-Control": "no-cache",
                "X-Accel-Buffering": "no",
            },
        )
    return success_response(result)


@router.post("/conversation/form-data", response_model=ApiResponse[dict])
async def extract_form_data(
    request: ConversationRequest,
    service: ConversationServiceDep,
) -> dict:
    """Extract the collected field values from a conversation."""
    form_fields_data = await service.get_form_fields_data_from_conversation(
        request.messages
    )
    return success_response(form_fields_data)


@router.post(
    "/conversation/name",
    response_model=ApiResponse[ConversationNameResponse],
)
async def generate_name(
    request: ConversationNameRequest,
    service: ConversationServiceDep,
) -> dict:
    """Generate a human-readable name from extracted field data."""
    name = await service.generate_conversation_name(request.form_fields_data)
    return success_response(ConversationNameResponse(name=name))


@router.post(
    "/conversation/save",
    response_model=ApiResponse[ConversationResponse],
    status_code=201,
)
async def save_conversation(
    request: ConversationRequest,
    service: ConversationServiceDep,
) -> dict:
    """Extract, name, sanitize and store a finished conversation."""
    conversation = await service.save_conversation(request.messages)
    return success_response(
        ConversationResponse.model_validate(conversation),
        status=201,
        message="Conversation saved",
    )


@router.get("/conversations", response_model=ApiResponse[ConversationListResponse])
async def list_conversations(
    service: ConversationServiceDep,
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> dict:
    """List saved conversations of the form, newest first."""
    rows, has_next = await service.list_conversations(limit=limit, offset=offset)
    return success_response(
        ConversationListResponse(
            conversations=[ConversationResponse.model_validate(r) for r in rows],
            has_next=has_next,
        )
    )


@router.get(
    "/conversations/{conversation_id}",
    response_model=ApiResponse[ConversationResponse],
)
async def get_conversation(
    conversation_id: int,
    service: ConversationServiceDep,
) -> dict:
    """Retrieve one saved conversation of the form."""
    conversation = await service.get_conversation(conversation_id)
    return success_response(ConversationResponse.model_validate(conversation))
