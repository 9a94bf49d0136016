"""
microkit

Resilient backend adapters for asyncio microservices:

- MongoConnectionProvider: reconnect-aware MongoDB connection
- NatsListener / NatsPublisher: durable at-least-once NATS JetStream messaging
- RedisCache: JSON cache with TTLs
- Settings / setup_logging / load_env: configuration and logging
"""

__version__ = "1.0.0"
