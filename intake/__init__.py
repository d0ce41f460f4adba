"""
Intake Forms Service.

- backend/: Form pages, delivery client, HTTP API, configuration
"""
