"""Messaging API routes."""

from datetime import datetime, timezone

from botbuilder.schema import Activity, ChannelAccount, ConversationAccount
from pydantic import BaseModel, Field
from fastapi import APIRouter, HTTPException

from ...app import IApplication

BOT_ACCOUNT_ID = "dialogbot"


class ActivityRequest(BaseModel):
    """Request model for an inbound activity."""

    type: str = "message"
    text: str | None = None
    conversation_id: str = Field(min_length=1)
    from_id: str = Field(min_length=1)
    from_name: str | None = None
    channel_id: str = "api"
    id: str | None = None

    def to_activity(self) -> Activity:
        return Activity(
            type=self.type,
            id=self.id,
            text=self.text,
            channel_id=self.channel_id,
            conversation=ConversationAccount(id=self.conversation_id),
            from_property=ChannelAccount(id=self.from_id, name=self.from_name),
            recipient=ChannelAccount(id=BOT_ACCOUNT_ID),
            timestamp=datetime.now(timezone.utc),
        )


class ActivityResponse(BaseModel):
    """Replies produced during the turn."""

    responses: list[str]


def create_messaging_router(app: IApplication) -> APIRouter:
    """Create messaging router."""
    router = APIRouter(prefix="/api", tags=["messaging"])

    @router.post("/messages", response_model=ActivityResponse)
    async def post_activity(request: ActivityRequest) -> dict:
        """Deliver an activity to the bot."""
        try:
            responses = await app.handle_activity(request.to_activity())
            return {"responses": responses}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
