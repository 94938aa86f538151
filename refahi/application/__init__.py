"""
Application layer.

The application layer orchestrates domain objects and defines the boundaries
of the system. It contains command and query handlers that represent the
operations available to members and administrators.

This layer contains:
- Commands: Write operations that change state
- Queries: Read operations that return data
- Handlers: Orchestrate domain logic
- DTOs: Data transfer objects for input/output
- Ports: Interfaces for external dependencies
"""
