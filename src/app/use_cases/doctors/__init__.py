"""Doctor Use Cases - seat-consuming operations"""

from .add_doctor_use_case import AddDoctorUseCase
from .archive_doctor_use_case import ArchiveDoctorUseCase
from .dtos import AddDoctorCommand, AddDoctorResponse, DoctorResponse

__all__ = [
    "AddDoctorUseCase",
    "ArchiveDoctorUseCase",
    "AddDoctorCommand",
    "AddDoctorResponse",
    "DoctorResponse",
]
