from .constants import ObjectType
from .entity import Entity


class Constraint(Entity):
    """A dual object."""

    def get_obj_type(self) -> ObjectType:
        return ObjectType.CONSTRAINT

    @property
    def obj_type(self) -> ObjectType:
        return ObjectType.CONSTRAINT
