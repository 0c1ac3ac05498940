from typing import List, Optional
from sqlalchemy.orm import Session, selectinload
from leasekeeper.database.models import Property as PropertyModel, Renovation
from leasekeeper.exceptions import NotFoundError
from leasekeeper.schemas.property_schema import PropertyCreate, RenovationCreate
from leasekeeper.services.base_service import BaseService
from leasekeeper.services.cascade_service import CascadeManager, CascadeReport


def recompute_renovation_total(property_obj: PropertyModel) -> float:
    """Set ``total_renovation_cost`` to the sum of the property's renovation costs."""
    total = float(sum(renovation.cost or 0 for renovation in property_obj.renovations))
    property_obj.total_renovation_cost = total
    return total


class PropertyService(BaseService):
    def __init__(self, cascade: Optional[CascadeManager] = None):
        super().__init__(PropertyModel)
        self.cascade = cascade or CascadeManager(property_repo=self)

    def create_property(
        self, db: Session, landlord_id: int, property_in: PropertyCreate
    ) -> PropertyModel:
        data = property_in.model_dump(exclude={"renovations"})
        property_obj = self.model(**data, landlord_id=landlord_id)
        property_obj.renovations = [
            Renovation(**renovation.model_dump(exclude_none=True))
            for renovation in property_in.renovations
        ]
        recompute_renovation_total(property_obj)
        return self.create(db, property_obj)

    def get_properties(self, db: Session, landlord_id: int) -> List[PropertyModel]:
        return (
            db.query(self.model)
            .options(selectinload(self.model.renovations))
            .filter(self.model.landlord_id == landlord_id)
            .order_by(self.model.created_at.desc(), self.model.id.desc())
            .all()
        )

    def get_owned_property(self, db: Session, landlord_id: int, property_id: int) -> PropertyModel:
        property_obj = self.find_by_id(db, property_id)
        if property_obj is None or property_obj.landlord_id != landlord_id:
            raise NotFoundError("Property", property_id)
        return property_obj

    def add_renovation(
        self, db: Session, property_obj: PropertyModel, renovation_in: RenovationCreate
    ) -> PropertyModel:
        property_obj.renovations.append(Renovation(**renovation_in.model_dump(exclude_none=True)))
        recompute_renovation_total(property_obj)
        db.commit()
        db.refresh(property_obj)
        return property_obj

    def remove_renovation(
        self, db: Session, property_obj: PropertyModel, renovation_id: int
    ) -> PropertyModel:
        renovation = next(
            (r for r in property_obj.renovations if r.id == renovation_id), None
        )
        if renovation is None:
            raise NotFoundError("Renovation", renovation_id)
        property_obj.renovations.remove(renovation)
        recompute_renovation_total(property_obj)
        db.commit()
        db.refresh(property_obj)
        return property_obj

    def delete_property(self, db: Session, landlord_id: int, property_id: int) -> CascadeReport:
        self.get_owned_property(db, landlord_id, property_id)
        return self.cascade.delete_property(db, property_id)
