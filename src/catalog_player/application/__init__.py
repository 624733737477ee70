"""
Application Layer

Contains application services and the ports they depend on.
This layer orchestrates domain objects and infrastructure to fulfill use cases.

Structure:
- services/: Pagination, playback and session orchestration
- interfaces/: Port interfaces for infrastructure adapters
"""
