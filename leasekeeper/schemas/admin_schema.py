from pydantic import BaseModel


class ModerationRequest(BaseModel):
    user_id: int
    # "ban", "unban" or "delete"; checked by the moderation service
    action: str


class DeletionAck(BaseModel):
    user_id: int
    message: str
    properties_deleted: int
    tenancies_deleted: int
