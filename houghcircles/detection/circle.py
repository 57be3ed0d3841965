"""Circle hypotheses extracted from the accumulator."""

from typing import Dict, List, NamedTuple, Sequence, Tuple


class Circle(NamedTuple):
    """A detected circle.

    index is the accumulator peak as (row, col), center the same point in
    physical (y, x) coordinates, radius is in physical length units.
    """
    index: Tuple[int, int]
    center: Tuple[float, float]
    radius: float
    votes: float
    id: int

    def as_xyr(self, spacing: Sequence[float] = (1.0, 1.0)) -> Tuple[int, int, int]:
        """Pixel (x, y, radius) for drawing with OpenCV."""
        pixel_radius = self.radius / min(spacing)
        return int(self.index[1]), int(self.index[0]), int(round(pixel_radius))

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "index": [int(self.index[0]), int(self.index[1])],
            "center": [round(self.center[0], 4), round(self.center[1], 4)],
            "radius": round(float(self.radius), 4),
            "votes": round(float(self.votes), 4)
        }


CircleList = List[Circle]
