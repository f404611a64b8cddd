"""Products app package.

Lenders list the items they rent out here. A product belongs to exactly
one user; bookings reference products without copying them.
"""
