"""
Service layer for business logic.

``account_service`` holds the Service contract and its store-backed
implementation; ``resolver`` binds request values to Service calls and
shapes the responses.
"""
