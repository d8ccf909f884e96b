"""Global mesh construction errors.

Every check runs at construction time. A failed check means no mesh object
is produced; there is no automatic repair of the inputs.
"""


class MeshConstructionError(ValueError):
    """Global mesh could not be constructed from the given geometry."""
    pass


class ExtentNotDivisibleError(MeshConstructionError):
    """Domain extent is not an integer multiple of the uniform cell size."""
    pass


class CellSizeMismatchError(MeshConstructionError):
    """Cell sizes implied by a uniform cell-count request differ between dimensions."""
    pass


class CellCountMismatchError(MeshConstructionError):
    """Recomputed global cell count differs from the requested count."""
    pass


class InvalidEdgesError(MeshConstructionError):
    """Non-uniform edge sequence is too short or not strictly increasing."""
    pass
