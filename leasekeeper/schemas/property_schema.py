from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime


class PopularPlace(BaseModel):
    name: str
    type: str  # 'filling_station', 'school', 'hospital'
    distance: Optional[str] = None  # '500m', '1.2km'


class RenovationCreate(BaseModel):
    type: str
    description: Optional[str] = None
    cost: float = Field(ge=0)
    date: Optional[datetime] = None
    documents: List[str] = []


class RenovationResponse(RenovationCreate):
    id: int
    property_id: int

    model_config = ConfigDict(from_attributes=True)


class PropertyBase(BaseModel):
    title: str
    description: Optional[str] = None
    address: str
    lat: float
    lng: float
    land_documents: List[str] = []
    property_images: List[str] = []
    popular_places: List[PopularPlace] = []
    purchase_price: Optional[float] = None
    estimated_value: Optional[float] = None


class PropertyCreate(PropertyBase):
    renovations: List[RenovationCreate] = []


class PropertyResponse(PropertyBase):
    id: int
    property_id: Optional[str] = None
    landlord_id: int
    total_renovation_cost: float
    renovations: List[RenovationResponse] = []
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PropertyMinimumResponse(BaseModel):
    id: int
    title: str
    address: str

    model_config = ConfigDict(from_attributes=True)
