"""Provider directory entries and booked appointments."""

from pydantic import BaseModel, Field
from typing import Optional, Tuple
from healthnav.models.triage import AppointmentStatus, AppointmentType
import uuid


class Provider(BaseModel):
    """Read-only provider directory entry."""

    id: str
    name: str
    specialty: str
    rating: float = Field(..., ge=0.0, le=5.0)
    distance_label: str  # e.g. "0.8 mi" or "Virtual"
    available_slots: Tuple[str, ...] = ()
    accepts_insurance: bool = True
    address: Optional[str] = None
    phone: Optional[str] = None

    class Config:
        frozen = True


class Appointment(BaseModel):
    """Appointment created from a provider slot selection."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    provider_id: str
    provider_name: str
    date: str
    time: str
    type: AppointmentType
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    symptoms: Tuple[str, ...] = ()

    class Config:
        frozen = True
