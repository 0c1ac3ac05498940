import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from leasekeeper.database.init import get_db
from leasekeeper.database.models import Property, User
from leasekeeper.exceptions import LeaseKeeperError
from leasekeeper.schemas.property_schema import PropertyCreate, PropertyResponse, RenovationCreate
from leasekeeper.services.property_service import PropertyService
from leasekeeper.utils.dependencies import get_current_user
from leasekeeper.utils.id_generator import generate_property_id
from leasekeeper.responses.success import created_response, data_response
from leasekeeper.responses.error import error_from_exception, internal_server_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/properties", tags=["Properties"])

property_service = PropertyService()


def _to_response(property_obj: Property) -> PropertyResponse:
    property_response = PropertyResponse.model_validate(property_obj)
    property_response.property_id = generate_property_id(property_obj.id)
    return property_response


@router.get("")
def get_my_properties(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        properties = property_service.get_properties(db, current_user.id)
        return data_response([_to_response(p) for p in properties])
    except Exception:
        logger.exception("Error fetching properties for %s", current_user.id)
        return internal_server_error("Error fetching properties")


@router.post("")
def create_property(
    payload: PropertyCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        property_obj = property_service.create_property(db, current_user.id, payload)
        return created_response(_to_response(property_obj))
    except Exception:
        logger.exception("Property creation error")
        return internal_server_error("Error creating property")


@router.get("/{property_id}")
def get_property(
    property_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        property_obj = property_service.get_owned_property(db, current_user.id, property_id)
        return data_response(_to_response(property_obj))
    except LeaseKeeperError as e:
        return error_from_exception(e)
    except Exception:
        logger.exception("Error fetching property %s", property_id)
        return internal_server_error("Error fetching property")


@router.delete("/{property_id}")
def delete_property(
    property_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete a property together with its renovations and tenancies."""
    try:
        report = property_service.delete_property(db, current_user.id, property_id)
        return data_response(
            {
                "message": f"Property {generate_property_id(property_id)} deleted",
                "tenancies_deleted": report.tenancies_deleted,
            }
        )
    except LeaseKeeperError as e:
        return error_from_exception(e)
    except Exception:
        logger.exception("Error deleting property %s", property_id)
        return internal_server_error("Error deleting property")


@router.post("/{property_id}/renovations")
def add_renovation(
    property_id: int,
    payload: RenovationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        property_obj = property_service.get_owned_property(db, current_user.id, property_id)
        property_obj = property_service.add_renovation(db, property_obj, payload)
        return created_response(_to_response(property_obj))
    except LeaseKeeperError as e:
        return error_from_exception(e)
    except Exception:
        logger.exception("Error adding renovation to property %s", property_id)
        return internal_server_error("Error adding renovation")


@router.delete("/{property_id}/renovations/{renovation_id}")
def remove_renovation(
    property_id: int,
    renovation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        property_obj = property_service.get_owned_property(db, current_user.id, property_id)
        property_obj = property_service.remove_renovation(db, property_obj, renovation_id)
        return data_response(_to_response(property_obj))
    except LeaseKeeperError as e:
        return error_from_exception(e)
    except Exception:
        logger.exception("Error removing renovation from property %s", property_id)
        return internal_server_error("Error removing renovation")
