"""Enumerations for evtax."""

from enum import StrEnum


class DeductionLimitReason(StrEnum):
    UVT = "uvt"
    RATE = "rate"


class OptimizationRationale(StrEnum):
    ALREADY_EXEMPT = "ALREADY_EXEMPT"
    ALREADY_IN_TARGET = "ALREADY_IN_TARGET"
    TARGET_REACHED = "TARGET_REACHED"
    VEHICLE_CEILING = "VEHICLE_CEILING"
    DEDUCTION_CAP = "DEDUCTION_CAP"


class ClientType(StrEnum):
    NATURAL = "natural"
    COMPANY = "empresa"
