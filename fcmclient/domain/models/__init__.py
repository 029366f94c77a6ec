"""Domain models for outbound messages and gateway responses."""
