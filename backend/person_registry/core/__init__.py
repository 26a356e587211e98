"""Storage contract and its implementations.

This module contains the abstractions that separate the business rules from
the database.
"""
