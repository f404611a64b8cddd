"""Bookings app package.

This app encapsulates the booking domain: borrowers reserve a product
for a period of time. Admission runs the overlap check and the insert
in a single transaction with the product row locked, so two bookings of
the same product never overlap.
"""
