"""Lattice registry mapping motif names to generator classes.

Both motifs place five records per site, so their files load as ordinary
lattices for extraction and corner statistics:

- 'square': arm moments circulate around a moment-free centre record.
  Windows of it are translated copies, so every corner gives the same
  energy and the standard deviation should vanish.
- 'pinwheel': arm moments point outward around an out-of-plane centre.
  Its windows give corner energies different from the square motif's.
"""
from .square import PinwheelGenerator, SquareGenerator

LATTICE_REGISTRY = {
    'square': SquareGenerator,
    'pinwheel': PinwheelGenerator,
}


def get_generator(name: str):
    """Get a lattice generator by name.

    Args:
        name: Motif name (e.g., 'square', 'pinwheel').

    Returns:
        An instance of the corresponding SiteLatticeGenerator subclass.

    Raises:
        KeyError: If the name is not in the registry.
    """
    if name not in LATTICE_REGISTRY:
        available = ', '.join(sorted(LATTICE_REGISTRY.keys()))
        raise KeyError(
            f"Unknown lattice '{name}'. Available: {available}"
        )
    return LATTICE_REGISTRY[name]()


def list_lattices():
    """Return sorted list of available lattice names."""
    return sorted(LATTICE_REGISTRY.keys())
