"""
Infrastructure Layer

Contains the implementations behind the domain interfaces:
- Database engine, sessions and SQLAlchemy models
- The SQLAlchemy order repository
- Configuration management
- Logging infrastructure
"""
