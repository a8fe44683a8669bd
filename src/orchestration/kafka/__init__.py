"""Kafka publishing for resolved postbacks."""
