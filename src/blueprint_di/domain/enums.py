from enum import Enum


class ImplementationKind(str, Enum):
    """Defines how a compiled definition produces its object.

    Attributes:
        CLASS: Instantiated from a resolved class.
        FACTORY: Produced by calling a method on a class or another service.
        SYNTHETIC: Supplied externally at runtime, nothing is compiled.
    """

    CLASS = "class"
    FACTORY = "factory"
    SYNTHETIC = "synthetic"

    def __str__(self) -> str:
        return self.value
