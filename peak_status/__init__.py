"""
Peak Status API - On-peak / off-peak electricity tariff resolution

A small service that tells whether electricity is currently billed at the
on-peak or off-peak rate for a utility provider, and how long until that
changes.

Main components:
- Tariff resolution engine (day selection, state evaluation, transition scan)
- Status service on top of the schedule store
- PostgreSQL schedule store with migrations and seed data
- Domain exceptions for clear error handling
"""

__version__ = "1.0.0"
