"""Boundary layer: database, outbound HTTP and cache adapters."""
