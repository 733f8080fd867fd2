"""Application layer: use-case services orchestrating CRUD and domain rules."""
