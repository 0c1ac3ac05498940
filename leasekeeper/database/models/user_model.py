from leasekeeper.database.init import Base
from leasekeeper.enums.account_status import AccountStatus

from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.sql import func


class User(Base):
    """A landlord account."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    phone = Column(String(20), nullable=False)
    hashed_password = Column(String(100), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    # is_banned implies not is_active; only the moderation service writes these
    is_banned = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def status(self) -> AccountStatus:
        if self.is_banned:
            return AccountStatus.BANNED
        if not self.is_active:
            return AccountStatus.INACTIVE
        return AccountStatus.ACTIVE
