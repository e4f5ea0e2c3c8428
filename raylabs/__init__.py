"""A small path tracer: vectors, shapes, materials, a path-tracing integrator,
JSON scene loading, logging and PNG image output."""

__version__ = "0.1.0"