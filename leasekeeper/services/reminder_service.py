import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from leasekeeper.database.models import Property
from leasekeeper.enums.tenancy_status import STATUS_COLORS
from leasekeeper.schemas.notification_schema import DispatchResult, NotificationRequest
from leasekeeper.schemas.property_schema import PropertyMinimumResponse
from leasekeeper.schemas.tenant_schema import (
    CalendarEntry,
    CalendarResource,
    DashboardSummary,
    TenantResponse,
)
from leasekeeper.services.dispatch_service import DispatchGateway
from leasekeeper.services.lifecycle_service import classify, summarize
from leasekeeper.services.tenant_service import TenantService
from leasekeeper.utils.date_utils import DateLike

logger = logging.getLogger(__name__)


class ReminderService:
    """Classifies a landlord's leases on demand and relays reminders."""

    def __init__(self, gateway: DispatchGateway, tenant_service: Optional[TenantService] = None):
        self.gateway = gateway
        self.tenant_service = tenant_service or TenantService()

    def calendar(self, db: Session, landlord_id: int, now: DateLike) -> List[CalendarEntry]:
        entries = []
        for tenant in self.tenant_service.get_tenants_by_landlord(db, landlord_id, active_only=True):
            classification = classify(now, tenant.rent_end, tenant.is_active)
            property_summary = (
                PropertyMinimumResponse.model_validate(tenant.property) if tenant.property else None
            )
            entries.append(
                CalendarEntry(
                    id=tenant.id,
                    title=f"{tenant.name} - Rent Expires",
                    start=tenant.rent_end,
                    end=tenant.rent_end,
                    resource=CalendarResource(
                        tenant=TenantResponse.model_validate(tenant),
                        property=property_summary,
                        status=classification.status,
                        days_until_expiry=classification.days_until_expiry,
                    ),
                    color=STATUS_COLORS[classification.status],
                )
            )
        return entries

    def dashboard(self, db: Session, landlord_id: int, now: DateLike) -> DashboardSummary:
        tenants = self.tenant_service.get_tenants_by_landlord(db, landlord_id)
        summary = summarize(tenants, now)
        total_properties = db.query(Property).filter(Property.landlord_id == landlord_id).count()
        return DashboardSummary(
            total_properties=total_properties,
            total_tenants=summary.total,
            active_tenants=summary.active,
            expiring_soon=summary.expiring_soon,
            expired=summary.expired,
            monthly_income=summary.monthly_income,
        )

    async def send_reminder(self, request: NotificationRequest) -> DispatchResult:
        result = await self.gateway.send(request)
        logger.info(
            "Reminder via %s to %s: %s",
            result.channel,
            request.to,
            "sent" if result.success else result.error,
        )
        return result
