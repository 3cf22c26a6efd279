"""Finite-difference kernels for a terrain-following regional ocean model."""

__version__ = "0.1.0"

__all__ = [
    "grid",
    "massflux",
    "vertical",
    "velocity",
    "eos",
    "mixing",
    "tracer_prestep",
    "pressure",
    "tracer_rhs",
]