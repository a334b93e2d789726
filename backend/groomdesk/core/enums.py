"""Module: enums."""

from enum import Enum


class Role(str, Enum):
    ADMIN = "admin"
    CUSTOMER = "customer"


class PetSpecies(str, Enum):
    DOG = "dog"
    CAT = "cat"
    BIRD = "bird"
    RABBIT = "rabbit"
    OTHER = "other"


class ServiceCategory(str, Enum):
    GROOMING = "grooming"
    BOARDING = "boarding"


# How the pet reaches the groomer.
class ServiceType(str, Enum):
    PICK_UP = "pick-up"
    HOME_SERVICE = "home-service"
    WALK_IN = "walk-in"


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
