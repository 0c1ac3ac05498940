from enum import Enum


class TenancyStatus(str, Enum):
    ACTIVE = "active"
    EXPIRING = "expiring"
    EXPIRED = "expired"


# Calendar colors per status
STATUS_COLORS = {
    TenancyStatus.ACTIVE: "#22c55e",
    TenancyStatus.EXPIRING: "#f59e0b",
    TenancyStatus.EXPIRED: "#ef4444",
}
