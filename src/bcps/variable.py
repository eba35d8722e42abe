from .constants import ObjectType
from .entity import Entity


class Variable(Entity):
    """A primal object."""

    def get_obj_type(self) -> ObjectType:
        return ObjectType.VARIABLE

    @property
    def obj_type(self) -> ObjectType:
        return ObjectType.VARIABLE
