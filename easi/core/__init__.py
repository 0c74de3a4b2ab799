"""Core types shared across the persistence layer."""
