"""Core domain logic for plant care scheduling."""
