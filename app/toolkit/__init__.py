"""
Toolkit - Domain-aware shared services.

Key components:
    - services/email.py: EmailService (templated HTML + text e-mail)

Usage:
    from toolkit.services import EmailService

Note:
    - This app has no models.
    - For generic infrastructure (tokens, hashing, rate limiting, caching), see core/
"""
