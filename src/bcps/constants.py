from enum import Flag, IntEnum, StrEnum


class ObjectType(IntEnum):
    """Role of an object in a subproblem: primal (variable) or dual (constraint)."""

    PRIMAL = 0
    VARIABLE = 0
    DUAL = 1
    CONSTRAINT = 1


class Representation(IntEnum):
    CORE = 0  # Explicit row/column of the core model
    INDEXED = 1  # Identified by index only
    ALGO = 2  # Generated by an algorithm (cuts, columns)


class IntegralityClass(StrEnum):
    CONTINUOUS = "C"
    INTEGER = "I"
    BINARY = "B"
    SEMICONTINUOUS = "S"


class StatusFlag(Flag):
    NONE = 0
    NON_REMOVABLE = 0x0001
    BRANCHED_ON = 0x0010
    SENDABLE = 0x0100


class BranchDirection(IntEnum):
    DOWN = -1
    UP = 1


# Default pseudo-cost estimate for branching in either direction
DEFAULT_ESTIMATE = 1.0e-5

# Default tolerances
DEFAULT_INT_TOL = 1.0e-6  # Integrality tolerance
DEFAULT_FEAS_TOL = 1.0e-6  # Row feasibility tolerance
DEFAULT_ETOL = 1.0e-6  # Zero tolerance for solution selection

# Seed of the weight stream used for duplicate-detection hashes
DEFAULT_HASH_SEED = 1234567

# Infeasibility values are scaled into [0, MAX_INFEASIBILITY]
MAX_INFEASIBILITY = 0.5
