from enum import Enum


class ModerationAction(str, Enum):
    BAN = "ban"
    UNBAN = "unban"
    DELETE = "delete"
