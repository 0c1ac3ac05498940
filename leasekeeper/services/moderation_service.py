import logging
import threading
from contextlib import contextmanager
from typing import Dict, List, Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from leasekeeper.config import Settings
from leasekeeper.database.models import User
from leasekeeper.enums.moderation_action import ModerationAction
from leasekeeper.exceptions import (
    NotFoundError,
    StorageFailureError,
    UnauthorizedError,
    ValidationError,
)
from leasekeeper.schemas.auth_schema import Principal
from leasekeeper.services.base_service import BaseService
from leasekeeper.services.cascade_service import CascadeManager, CascadeReport

logger = logging.getLogger(__name__)

# Flag values written by each status transition
_TRANSITIONS = {
    ModerationAction.BAN: {"is_banned": True, "is_active": False},
    ModerationAction.UNBAN: {"is_banned": False, "is_active": True},
}


class AccountLockRegistry:
    """
    Hands out one lock per account id.

    Holders and waiters are counted; a lock is forgotten only once the last
    of them has left, so every caller for an id contends on the same lock.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[int, threading.Lock] = {}
        self._holders: Dict[int, int] = {}

    @contextmanager
    def hold(self, account_id: int):
        with self._guard:
            lock = self._locks.setdefault(account_id, threading.Lock())
            self._holders[account_id] = self._holders.get(account_id, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._guard:
                self._holders[account_id] -= 1
                if not self._holders[account_id]:
                    del self._holders[account_id]
                    del self._locks[account_id]


# Shared by every ModerationService in the process
account_locks = AccountLockRegistry()


class ModerationService:
    def __init__(
        self,
        settings: Settings,
        cascade: Optional[CascadeManager] = None,
        user_repo: Optional[BaseService] = None,
        locks: Optional[AccountLockRegistry] = None,
    ):
        self.settings = settings
        self.user_repo = user_repo or BaseService(User)
        self.cascade = cascade or CascadeManager(user_repo=self.user_repo)
        self.locks = locks or account_locks

    def _authorize(self, principal: Optional[Principal]) -> Principal:
        if principal is None or not principal.is_admin:
            raise UnauthorizedError()
        return principal

    def list_accounts(self, db: Session, principal: Optional[Principal]) -> List[User]:
        self._authorize(principal)
        return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()

    def apply(
        self,
        db: Session,
        principal: Optional[Principal],
        account_id: int,
        action: Union[ModerationAction, str],
    ) -> Union[User, CascadeReport]:
        self._authorize(principal)
        try:
            action = ModerationAction(action)
        except ValueError:
            raise ValidationError(f"Unknown moderation action: {action!r}", field="action")

        if action is ModerationAction.DELETE:
            return self.delete(db, principal, account_id)
        return self._transition(db, principal, account_id, action)

    def ban(self, db: Session, principal: Optional[Principal], account_id: int) -> User:
        self._authorize(principal)
        return self._transition(db, principal, account_id, ModerationAction.BAN)

    def unban(self, db: Session, principal: Optional[Principal], account_id: int) -> User:
        self._authorize(principal)
        return self._transition(db, principal, account_id, ModerationAction.UNBAN)

    def delete(self, db: Session, principal: Optional[Principal], account_id: int) -> CascadeReport:
        self._authorize(principal)
        with self.locks.hold(account_id):
            report = self.cascade.delete_account(db, account_id)
        logger.info("Account %s deleted by %s", account_id, principal.subject)
        return report

    def _transition(
        self,
        db: Session,
        principal: Principal,
        account_id: int,
        action: ModerationAction,
    ) -> User:
        flags = _TRANSITIONS[action]
        with self.locks.hold(account_id):
            user = self.user_repo.find_by_id(db, account_id)
            if user is None:
                raise NotFoundError("User", account_id)
            if all(getattr(user, key) == value for key, value in flags.items()):
                return user

            try:
                updated = (
                    db.query(User)
                    .filter(User.id == account_id)
                    .update(flags, synchronize_session="fetch")
                )
                if not updated:
                    db.rollback()
                    raise NotFoundError("User", account_id)
                db.commit()
            except SQLAlchemyError as exc:
                db.rollback()
                logger.exception("Failed to %s account %s", action.value, account_id)
                raise StorageFailureError(f"Account {action.value}", str(exc)) from exc

            db.refresh(user)
        logger.info("Account %s: %s by %s", account_id, action.value, principal.subject)
        return user
