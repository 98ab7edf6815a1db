"""Bot Framework messaging endpoint."""

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends
from gateway_common.logging import setup_logging

from dependencies import get_turn_handler
from domain import Activity
from handlers import TurnHandler
from response_models import ActivityAccepted

logger = setup_logging()

router = APIRouter(prefix="/api", tags=["messages"])

TurnHandlerDep = Annotated[TurnHandler, Depends(get_turn_handler)]


@router.post("/messages", status_code=202, response_model=ActivityAccepted)
def receive_activity(
    activity: Activity,
    background_tasks: BackgroundTasks,
    turn_handler: TurnHandlerDep,
) -> ActivityAccepted:
    """
    Accepts an inbound activity and processes the turn in the background.

    Voice notes can take longer than the channel waits for an HTTP response,
    so replies go out through the Bot Connector once the turn completes.
    """
    logger.info(
        "Activity received",
        extra={
            "activity_type": activity.type,
            "activity_id": activity.id,
            "channel_id": activity.channel_id,
            "attachment_count": len(activity.attachments),
        },
    )
    background_tasks.add_task(turn_handler.on_turn, activity)
    return ActivityAccepted()
