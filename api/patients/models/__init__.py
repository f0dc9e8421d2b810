# patients/models/__init__.py
from .base import BaseModel
from .constants import *
from .paciente import Paciente

__all__ = [
    'BaseModel',
    'Paciente',
]
