from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import date, datetime

from leasekeeper.enums.tenancy_status import TenancyStatus
from .property_schema import PropertyMinimumResponse


class TenantBase(BaseModel):
    name: str
    email: str
    phone: str
    rent_amount: float = Field(ge=0)
    rent_start: date
    rent_duration: str  # "12 months", "2 years"
    last_payment_date: Optional[date] = None
    documents: List[str] = []
    notes: Optional[str] = None


class TenantCreate(TenantBase):
    property_id: int


class TenancyAmend(BaseModel):
    rent_start: Optional[date] = None
    rent_duration: Optional[str] = None
    rent_amount: Optional[float] = Field(default=None, ge=0)
    is_active: Optional[bool] = None
    notes: Optional[str] = None


class PaymentRecord(BaseModel):
    paid_on: date


class TenantResponse(TenantBase):
    id: int
    landlord_id: int
    property_id: int
    rent_end: date
    next_payment_date: Optional[date] = None
    is_active: bool
    created_at: Optional[datetime] = None
    property: Optional[PropertyMinimumResponse] = None

    model_config = ConfigDict(from_attributes=True)


class CalendarResource(BaseModel):
    tenant: TenantResponse
    property: Optional[PropertyMinimumResponse] = None
    status: TenancyStatus
    days_until_expiry: int


class CalendarEntry(BaseModel):
    id: int
    title: str
    start: date
    end: date
    all_day: bool = True
    resource: CalendarResource
    color: str


class DashboardSummary(BaseModel):
    total_properties: int
    total_tenants: int
    active_tenants: int
    expiring_soon: int
    expired: int
    monthly_income: float
