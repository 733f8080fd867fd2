"""Core domain layer: enums, exceptions, security and integration helpers."""
