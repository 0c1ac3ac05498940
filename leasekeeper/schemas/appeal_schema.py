from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from leasekeeper.enums.account_status import AccountStatus
from .notification_schema import DispatchResult


class AppealCreate(BaseModel):
    # Required fields are checked by the appeal service so that a blank
    # message is reported as a validation error rather than a schema error
    name: str = ""
    email: str = ""
    phone: Optional[str] = None
    reason: Optional[str] = None
    message: str = ""
    account_status: AccountStatus = AccountStatus.BANNED
    submitted_at: Optional[datetime] = None


class AppealReceipt(BaseModel):
    appeal_id: str
    message: str = "Appeal submitted successfully"
    estimated_response: str = "24-48 hours"
    dispatch_results: List[DispatchResult] = []
