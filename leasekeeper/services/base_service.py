from typing import Type, TypeVar, Optional, List, Any, Union, Mapping
from pydantic import BaseModel
from sqlalchemy.orm import Session

ModelType = TypeVar('ModelType')
UpdateSchemaType = TypeVar('UpdateSchemaType')


class BaseService:
    """
    Generic repository over one SQLAlchemy model.

    Write methods commit by default; pass ``commit=False`` to leave the change
    pending so an orchestrator can group several writes into one transaction.
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model

    def _query(self, db: Session, criteria, filters):
        query = db.query(self.model)
        if criteria:
            query = query.filter(*criteria)
        if filters:
            query = query.filter_by(**filters)
        return query

    def find(self, db: Session, *criteria, **filters) -> List[ModelType]:
        return self._query(db, criteria, filters).all()

    def find_by_id(self, db: Session, id: int) -> Optional[ModelType]:
        return db.query(self.model).filter(self.model.id == id).first()

    def create(self, db: Session, obj_in, commit: bool = True) -> ModelType:
        """
        Create a new record in the database

        Args:
            db: Database session
            obj_in: A SQLAlchemy model, a Pydantic schema or a plain dict
            commit: Commit and refresh when True, otherwise only flush

        Returns:
            The created model instance
        """
        if isinstance(obj_in, BaseModel):
            db_obj = self.model(**obj_in.model_dump())
        elif isinstance(obj_in, Mapping):
            db_obj = self.model(**obj_in)
        else:
            db_obj = obj_in

        db.add(db_obj)
        if commit:
            db.commit()
            db.refresh(db_obj)
        else:
            db.flush()
        return db_obj

    def update(
        self,
        db: Session,
        db_obj: ModelType,
        patch: Union[UpdateSchemaType, Mapping[str, Any]],
        commit: bool = True,
    ) -> ModelType:
        if isinstance(patch, BaseModel):
            patch = patch.model_dump(exclude_unset=True)
        for key, value in patch.items():
            setattr(db_obj, key, value)
        if commit:
            db.commit()
            db.refresh(db_obj)
        return db_obj

    def delete_by_id(self, db: Session, id: int, commit: bool = True) -> bool:
        deleted = (
            db.query(self.model)
            .filter(self.model.id == id)
            .delete(synchronize_session="fetch")
        )
        if commit:
            db.commit()
        return deleted > 0

    def delete_many(self, db: Session, *criteria, commit: bool = True, **filters) -> int:
        deleted = self._query(db, criteria, filters).delete(synchronize_session="fetch")
        if commit:
            db.commit()
        return deleted
