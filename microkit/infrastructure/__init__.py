"""
Infrastructure Module

Adapters for external services: MongoDB, NATS and Redis.
"""
