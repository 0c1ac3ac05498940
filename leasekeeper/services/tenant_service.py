from datetime import date
from typing import List

from sqlalchemy.orm import Session, joinedload

from leasekeeper.database.models import Property, Tenant
from leasekeeper.exceptions import NotFoundError
from leasekeeper.schemas.tenant_schema import TenancyAmend, TenantCreate
from leasekeeper.services.base_service import BaseService
from leasekeeper.services.lifecycle_service import (
    compute_lease_end,
    compute_next_payment,
    parse_duration,
)


class TenantService(BaseService):
    def __init__(self):
        super().__init__(Tenant)

    def create_tenant(self, db: Session, tenant_in: TenantCreate, landlord_id: int) -> Tenant:
        property_obj = db.query(Property).filter(Property.id == tenant_in.property_id).first()
        if not property_obj or property_obj.landlord_id != landlord_id:
            raise NotFoundError("Property", tenant_in.property_id)

        duration = parse_duration(tenant_in.rent_duration)
        db_tenant = Tenant(
            **tenant_in.model_dump(),
            landlord_id=landlord_id,
            rent_end=compute_lease_end(tenant_in.rent_start, duration),
            is_active=True,
        )
        db_tenant.rent_duration = str(duration)
        if db_tenant.last_payment_date:
            db_tenant.next_payment_date = compute_next_payment(db_tenant.last_payment_date)
        return self.create(db, db_tenant)

    def get_tenants_by_landlord(
        self, db: Session, landlord_id: int, active_only: bool = False
    ) -> List[Tenant]:
        query = (
            db.query(Tenant)
            .options(joinedload(Tenant.property))
            .filter(Tenant.landlord_id == landlord_id)
        )
        if active_only:
            query = query.filter(Tenant.is_active.is_(True))
        return query.order_by(Tenant.rent_end, Tenant.id).all()

    def get_owned_tenant(self, db: Session, landlord_id: int, tenant_id: int) -> Tenant:
        tenant = self.find_by_id(db, tenant_id)
        if not tenant or tenant.landlord_id != landlord_id:
            raise NotFoundError("Tenant", tenant_id)
        return tenant

    def record_payment(self, db: Session, tenant: Tenant, paid_on: date) -> Tenant:
        return self.update(
            db,
            tenant,
            {"last_payment_date": paid_on, "next_payment_date": compute_next_payment(paid_on)},
        )

    def amend_tenant(self, db: Session, tenant: Tenant, amendment: TenancyAmend) -> Tenant:
        """Apply an explicit amendment; rent_end is recomputed only here."""
        patch = amendment.model_dump(exclude_unset=True, exclude_none=True)
        if "rent_start" in patch or "rent_duration" in patch:
            rent_start = patch.get("rent_start") or tenant.rent_start
            duration = parse_duration(patch.get("rent_duration") or tenant.rent_duration)
            patch["rent_start"] = rent_start
            patch["rent_duration"] = str(duration)
            patch["rent_end"] = compute_lease_end(rent_start, duration)
        return self.update(db, tenant, patch)
