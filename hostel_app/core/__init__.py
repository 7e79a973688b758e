"""Core utilities: exceptions, logging, security and middleware."""
