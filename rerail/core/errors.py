"""
Editor Error Types.

Exceptions raised by the map engine and coordinate helpers. Hit-test misses
and cancelled dialogs are not exceptions; they are reported as ``None``.
"""


class RerailError(Exception):
    """Base class for all editor errors."""


class InvalidReference(RerailError):
    """
    A request referenced a railway, point or border id that does not exist
    in the current map snapshot.
    """

    def __init__(self, kind: str, ref: object) -> None:
        self.kind = kind
        self.ref = ref
        super().__init__(f"Invalid {kind} reference: {ref!r}")


class OutOfRangeZoom(RerailError):
    """A zoom level index outside of the zoom factor table was requested."""

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"Zoom level index out of range: {index}")
