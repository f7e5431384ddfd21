import enum


class MissingType(enum.Enum):
    """
    Marker for an omitted optional field.

    Distinguishes a field that was not provided (MISSING) from a field that was
    explicitly set to null (None), e.g. when patching a resource.
    """

    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = MissingType.MISSING
