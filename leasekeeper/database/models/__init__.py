from .user_model import User
from .property_model import Property, Renovation
from .tenant_model import Tenant

__all__ = ["User", "Property", "Renovation", "Tenant"]
