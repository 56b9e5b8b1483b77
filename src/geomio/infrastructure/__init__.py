"""Infrastructure layer: I/O plumbing used by geometry readers and writers."""
