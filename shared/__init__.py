"""
Shared Kernel

This module contains base classes and utilities shared across all domain contexts:
value objects, the clock abstraction and the unit of work contract.
"""
