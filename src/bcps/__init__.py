__all__ = [
    "Entity",
    "Variable",
    "Constraint",
    "IntegerVariable",
    "LinearConstraint",
    "PseudocostData",
    "Solution",
    "BranchObject",
    "Model",
    "RelaxationModel",
    "Encoded",
    "DecodeError",
    "decode_knowledge",
    "register_knowledge_type",
    "ObjectType",
    "Representation",
    "IntegralityClass",
    "StatusFlag",
    "BranchDirection",
    "NON_REMOVABLE",
    "BRANCHED_ON",
    "SENDABLE",
    "CORE",
    "INDEXED",
    "ALGO",
    "DOWN",
    "UP",
]

from .constants import (
    BranchDirection,
    IntegralityClass,
    ObjectType,
    Representation,
    StatusFlag,
)
from .encoded import DecodeError, Encoded, decode_knowledge, register_knowledge_type
from .solution import Solution
from .entity import Entity
from .variable import Variable
from .constraint import Constraint
from .branch import BranchObject
from .model import Model, RelaxationModel
from .objects import IntegerVariable, LinearConstraint, PseudocostData

NON_REMOVABLE = StatusFlag.NON_REMOVABLE
BRANCHED_ON = StatusFlag.BRANCHED_ON
SENDABLE = StatusFlag.SENDABLE

CORE = Representation.CORE
INDEXED = Representation.INDEXED
ALGO = Representation.ALGO

DOWN = BranchDirection.DOWN
UP = BranchDirection.UP
