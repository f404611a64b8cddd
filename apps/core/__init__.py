"""Operational endpoints shared by the whole service."""
