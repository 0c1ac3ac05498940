import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from leasekeeper.database.models import Property, Renovation, Tenant, User
from leasekeeper.exceptions import NotFoundError, StorageFailureError
from leasekeeper.services.base_service import BaseService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CascadeReport:
    account_id: Optional[int]
    tenancies_deleted: int = 0
    renovations_deleted: int = 0
    properties_deleted: int = 0


class CascadeManager:
    """
    Removes an account or a property together with everything referencing it.

    The store does not enforce references, so this is the only thing keeping
    tenancies and renovations from outliving their owner. Each call runs in a
    single transaction: tenancies first, then renovations, then properties,
    then the account. Any storage error rolls the whole call back.
    """

    def __init__(
        self,
        user_repo: Optional[BaseService] = None,
        property_repo: Optional[BaseService] = None,
        renovation_repo: Optional[BaseService] = None,
        tenant_repo: Optional[BaseService] = None,
    ):
        self.user_repo = user_repo or BaseService(User)
        self.property_repo = property_repo or BaseService(Property)
        self.renovation_repo = renovation_repo or BaseService(Renovation)
        self.tenant_repo = tenant_repo or BaseService(Tenant)

    def delete_account(self, db: Session, account_id: int) -> CascadeReport:
        if self.user_repo.find_by_id(db, account_id) is None:
            raise NotFoundError("User", account_id)

        try:
            report = self._purge(db, account_id, Property.landlord_id == account_id)
            self.user_repo.delete_by_id(db, account_id, commit=False)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Cascade delete of account %s rolled back", account_id)
            raise StorageFailureError("Account deletion", str(exc)) from exc

        logger.info(
            "Deleted account %s with %d properties, %d tenancies, %d renovations",
            account_id,
            report.properties_deleted,
            report.tenancies_deleted,
            report.renovations_deleted,
        )
        return report

    def delete_property(self, db: Session, property_id: int) -> CascadeReport:
        if self.property_repo.find_by_id(db, property_id) is None:
            raise NotFoundError("Property", property_id)

        try:
            report = self._purge(db, None, Property.id == property_id)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Deletion of property %s rolled back", property_id)
            raise StorageFailureError("Property deletion", str(exc)) from exc

        logger.info(
            "Deleted property %s with %d tenancies",
            property_id,
            report.tenancies_deleted,
        )
        return report

    def _purge(self, db: Session, account_id: Optional[int], property_filter) -> CascadeReport:
        owned_property_ids = select(Property.id).where(property_filter)

        tenancy_criteria = [Tenant.property_id.in_(owned_property_ids)]
        if account_id is not None:
            tenancy_criteria.append(Tenant.landlord_id == account_id)

        tenancies = self.tenant_repo.delete_many(db, or_(*tenancy_criteria), commit=False)
        renovations = self.renovation_repo.delete_many(
            db, Renovation.property_id.in_(owned_property_ids), commit=False
        )
        properties = self.property_repo.delete_many(db, property_filter, commit=False)

        return CascadeReport(
            account_id=account_id,
            tenancies_deleted=tenancies,
            renovations_deleted=renovations,
            properties_deleted=properties,
        )
