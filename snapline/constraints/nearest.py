"""Per-axis accumulation of the nearest snap candidates.

Point and gap detectors feed the same accumulator during one phase, so a
point candidate and a gap candidate at the same offset are both kept.
Offering a candidate never mutates the accumulator; a new one is returned.
"""

from dataclasses import dataclass

from snapline.config import SNAP_PRECISION
from snapline.dsl.schema import Snap


@dataclass(frozen=True)
class NearestSnaps:
    """Nearest candidates found so far on one axis.

    ``threshold`` caps the distance of the first accepted candidate. Once
    candidates exist, they all share one signed offset and later candidates
    are compared against it.
    """

    threshold: float
    snaps: tuple[Snap, ...] = ()
    precision: float = SNAP_PRECISION

    @property
    def offset(self) -> float:
        """Offset of the first kept candidate, or 0 when there is none."""
        return self.snaps[0].offset if self.snaps else 0.0

    def offer(self, snap: Snap) -> "NearestSnaps":
        """Return the accumulator updated with a candidate.

        A strictly nearer candidate (by more than ``precision``) replaces the
        kept ones. A candidate at the same signed offset is appended. On a
        magnitude tie with opposite signs, the positive offset wins.
        """
        distance = abs(snap.offset)
        if distance > self.threshold:
            return self

        if not self.snaps:
            return NearestSnaps(self.threshold, (snap,), self.precision)

        best = self.snaps[0].offset
        if distance < abs(best) - self.precision:
            return NearestSnaps(self.threshold, (snap,), self.precision)

        if abs(distance - abs(best)) > self.precision:
            return self

        if abs(snap.offset - best) <= self.precision:
            return NearestSnaps(self.threshold, self.snaps + (snap,), self.precision)

        if snap.offset > best:
            return NearestSnaps(self.threshold, (snap,), self.precision)
        return self


@dataclass(frozen=True)
class SnapAccumulator:
    """Nearest candidates on both axes for one detection phase."""

    x: NearestSnaps
    y: NearestSnaps

    @classmethod
    def start(cls, threshold: float, precision: float = SNAP_PRECISION) -> "SnapAccumulator":
        """Empty accumulator accepting candidates up to a distance."""
        return cls(x=NearestSnaps(threshold, precision=precision), y=NearestSnaps(threshold, precision=precision))

    @property
    def snaps(self) -> list[Snap]:
        """X candidates followed by Y candidates."""
        return [*self.x.snaps, *self.y.snaps]

