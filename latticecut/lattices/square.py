"""Square site motifs: one centre record plus four arm records."""
from .base import SiteLatticeGenerator, SiteMotif


class SquareGenerator(SiteLatticeGenerator):
    """Square motif: centre record with zero moment, arm moments circulating.

    Offsets (fraction of spacing):
      r0 = (0.5, 0.5) centre, r1 = (0.5, 0.25) bottom, r2 = (0.75, 0.5) right,
      r3 = (0.5, 0.75) top, r4 = (0.25, 0.5) left
    Arm moments are tangential and circulate counterclockwise.
    """

    name = "square"

    def _define_motif(self) -> SiteMotif:
        return SiteMotif(
            offsets=[(0.5, 0.5), (0.5, 0.25), (0.75, 0.5), (0.5, 0.75), (0.25, 0.5)],
            moments=[
                (0.0, 0.0, 0.0),
                (1.0, 0.0, 0.0),
                (0.0, 1.0, 0.0),
                (-1.0, 0.0, 0.0),
                (0.0, -1.0, 0.0),
            ],
        )


class PinwheelGenerator(SiteLatticeGenerator):
    """Square motif with arm moments rotated 90 degrees (pointing outward).

    Same offsets as SquareGenerator; the centre record carries an
    out-of-plane moment.
    """

    name = "pinwheel"

    def _define_motif(self) -> SiteMotif:
        return SiteMotif(
            offsets=[(0.5, 0.5), (0.5, 0.25), (0.75, 0.5), (0.5, 0.75), (0.25, 0.5)],
            moments=[
                (0.0, 0.0, 1.0),
                (0.0, -1.0, 0.0),
                (1.0, 0.0, 0.0),
                (0.0, 1.0, 0.0),
                (-1.0, 0.0, 0.0),
            ],
        )
