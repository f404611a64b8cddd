"""Users app package.

Defines the marketplace account (lender or borrower), JWT-based
registration and login, and phone verification through an OTP gateway.
Use ``apps.users.models.CustomUser`` as the AUTH_USER_MODEL throughout
the project.
"""
