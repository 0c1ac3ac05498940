import pytest

from leasekeeper.exceptions import NotFoundError
from leasekeeper.schemas.property_schema import RenovationCreate
from leasekeeper.services.property_service import PropertyService
from leasekeeper.utils.id_generator import generate_property_id


@pytest.fixture
def properties():
    return PropertyService()


def test_create_sums_renovation_costs(make_user, make_property):
    landlord = make_user()

    property_obj = make_property(landlord, renovation_costs=(1200.0, 300.5))

    assert property_obj.landlord_id == landlord.id
    assert len(property_obj.renovations) == 2
    assert property_obj.total_renovation_cost == pytest.approx(1500.5)


def test_add_and_remove_renovation_keep_total_current(db, properties, make_user, make_property):
    property_obj = make_property(make_user(), renovation_costs=(100.0,))

    property_obj = properties.add_renovation(
        db, property_obj, RenovationCreate(type="roofing", cost=900.0)
    )
    assert property_obj.total_renovation_cost == pytest.approx(1000.0)

    roofing = next(r for r in property_obj.renovations if r.type == "roofing")
    property_obj = properties.remove_renovation(db, property_obj, roofing.id)
    assert property_obj.total_renovation_cost == pytest.approx(100.0)


def test_remove_unknown_renovation(db, properties, make_user, make_property):
    property_obj = make_property(make_user())
    with pytest.raises(NotFoundError):
        properties.remove_renovation(db, property_obj, 9999)


def test_listing_is_scoped_to_the_landlord(db, properties, make_user, make_property):
    owner, other = make_user(), make_user()
    make_property(owner, title="A")
    make_property(owner, title="B")
    make_property(other, title="C")

    titles = {p.title for p in properties.get_properties(db, owner.id)}

    assert titles == {"A", "B"}


def test_other_landlords_property_is_not_found(db, properties, make_user, make_property):
    property_obj = make_property(make_user())
    intruder = make_user()

    with pytest.raises(NotFoundError):
        properties.get_owned_property(db, intruder.id, property_obj.id)
    with pytest.raises(NotFoundError):
        properties.delete_property(db, intruder.id, property_obj.id)


def test_delete_property_cascades_to_tenancies(db, properties, make_user, make_property, make_tenancy):
    landlord = make_user()
    property_obj = make_property(landlord)
    make_tenancy(landlord, property_obj)
    make_tenancy(landlord, property_obj, name="Second Tenant")

    report = properties.delete_property(db, landlord.id, property_obj.id)

    assert report.properties_deleted == 1
    assert report.tenancies_deleted == 2


def test_property_code_format():
    assert generate_property_id(7) == "PROP-0007"
    assert generate_property_id(12345) == "PROP-12345"
