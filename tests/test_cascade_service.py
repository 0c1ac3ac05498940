import pytest
from sqlalchemy.exc import OperationalError

from leasekeeper.database.models import Property, Renovation, Tenant, User
from leasekeeper.exceptions import NotFoundError, StorageFailureError
from leasekeeper.services.base_service import BaseService
from leasekeeper.services.cascade_service import CascadeManager


class FailingPropertyRepo(BaseService):
    """Fails after tenancies and renovations have already been deleted."""

    def __init__(self):
        super().__init__(Property)

    def delete_many(self, db, *criteria, commit=True, **filters):
        raise OperationalError("DELETE FROM properties", {}, Exception("disk I/O error"))


@pytest.fixture
def landlord_with_portfolio(make_user, make_property, make_tenancy):
    """A landlord with 3 properties and 5 tenancies spread across them."""
    landlord = make_user()
    properties = [
        make_property(landlord, title=f"Unit {i}", renovation_costs=(100.0, 250.0))
        for i in range(3)
    ]
    for i in range(5):
        make_tenancy(landlord, properties[i % 3], name=f"Tenant {i}")
    return landlord, properties


def _count(db, model, *criteria):
    return db.query(model).filter(*criteria).count()


def test_delete_account_removes_everything_it_owns(db, landlord_with_portfolio, make_user, make_property, make_tenancy):
    landlord, properties = landlord_with_portfolio
    bystander = make_user()
    make_tenancy(bystander, make_property(bystander, renovation_costs=(50.0,)))

    landlord_id = landlord.id
    property_ids = [p.id for p in properties]

    report = CascadeManager().delete_account(db, landlord_id)

    assert report.account_id == landlord_id
    assert report.properties_deleted == 3
    assert report.tenancies_deleted == 5
    assert report.renovations_deleted == 6

    db.expire_all()
    assert db.query(User).filter(User.id == landlord_id).first() is None
    assert _count(db, Property, Property.landlord_id == landlord_id) == 0
    assert _count(db, Tenant, Tenant.landlord_id == landlord_id) == 0
    assert _count(db, Renovation, Renovation.property_id.in_(property_ids)) == 0

    # Nothing belonging to someone else is touched
    assert _count(db, Property, Property.landlord_id == bystander.id) == 1
    assert _count(db, Tenant, Tenant.landlord_id == bystander.id) == 1
    assert _count(db, Renovation) == 1


def test_no_tenancy_survives_on_a_deleted_property(db, landlord_with_portfolio):
    landlord, _ = landlord_with_portfolio

    CascadeManager().delete_account(db, landlord.id)

    db.expire_all()
    orphans = (
        db.query(Tenant)
        .outerjoin(Property, Tenant.property_id == Property.id)
        .filter(Property.id.is_(None))
        .count()
    )
    assert orphans == 0


def test_delete_account_unknown_id(db):
    with pytest.raises(NotFoundError):
        CascadeManager().delete_account(db, 999)


def test_delete_account_with_nothing_owned(db, make_user):
    landlord = make_user()

    report = CascadeManager().delete_account(db, landlord.id)

    assert report.properties_deleted == 0
    assert report.tenancies_deleted == 0
    db.expire_all()
    assert db.query(User).count() == 0


def test_failure_rolls_back_the_whole_cascade(db, landlord_with_portfolio):
    landlord, _ = landlord_with_portfolio
    manager = CascadeManager(property_repo=FailingPropertyRepo())

    with pytest.raises(StorageFailureError) as exc_info:
        manager.delete_account(db, landlord.id)

    assert exc_info.value.status_code == 500
    db.expire_all()
    assert db.query(User).filter(User.id == landlord.id).count() == 1
    assert _count(db, Property, Property.landlord_id == landlord.id) == 3
    assert _count(db, Tenant, Tenant.landlord_id == landlord.id) == 5
    assert _count(db, Renovation) == 6


def test_delete_property_takes_only_its_own_tenancies(db, landlord_with_portfolio):
    landlord, properties = landlord_with_portfolio
    target_id = properties[0].id

    report = CascadeManager().delete_property(db, target_id)

    # Tenancies 0 and 3 live on the first property
    assert report.tenancies_deleted == 2
    assert report.renovations_deleted == 2
    assert report.properties_deleted == 1
    db.expire_all()
    assert _count(db, Tenant, Tenant.property_id == target_id) == 0
    assert _count(db, Tenant, Tenant.landlord_id == landlord.id) == 3
    assert _count(db, Property, Property.landlord_id == landlord.id) == 2
    assert db.query(User).filter(User.id == landlord.id).count() == 1


def test_delete_property_unknown_id(db):
    with pytest.raises(NotFoundError):
        CascadeManager().delete_property(db, 12345)
