import logging

from fastapi import APIRouter, Depends, Security
from pydantic import ValidationError
from starlette.requests import Request

from magnet_rss.dependencies import get_store, verify_bearer_token
from magnet_rss.exceptions import MalformedInputError, StorageFailureError
from magnet_rss.schemas.magnet import UpdateRequest, UpdateResponse
from magnet_rss.services.kv_store import KeyValueStore, StorageError
from magnet_rss.services.magnet import display_name_for
from magnet_rss.services.magnet_service import set_latest_magnet

logger = logging.getLogger(__name__)

router = APIRouter(tags=["update"])

_MISSING_FIELD_MESSAGE = 'Invalid or missing "magnet" field in JSON body.'


def _validation_message(exc: ValidationError) -> str:
    for error in exc.errors():
        if error["type"] == "value_error":
            return str(error["ctx"]["error"])
    return _MISSING_FIELD_MESSAGE


@router.post("/update", response_model=UpdateResponse)
async def update_magnet(
    request: Request,
    _auth: None = Security(verify_bearer_token),
    store: KeyValueStore = Depends(get_store),
):
    """Replace the stored magnet link.

    The body is read by hand rather than declared as a model so that
    authentication always runs first and malformed JSON maps to 400.
    """
    try:
        payload = await request.json()
    except ValueError:
        raise MalformedInputError("Invalid JSON body.")

    try:
        data = UpdateRequest.model_validate(payload)
    except ValidationError as exc:
        raise MalformedInputError(_validation_message(exc))

    try:
        state = await set_latest_magnet(store, data.magnet)
    except StorageError:
        logger.exception("Failed to store magnet link")
        raise StorageFailureError("Failed to store magnet link. Please retry.")

    display_name = display_name_for(state.magnet)
    logger.info("Magnet link updated: %r", display_name)
    return UpdateResponse(
        success=True,
        message="Magnet link updated successfully.",
        display_name=display_name,
        updated_at=state.updated_at,
    )
