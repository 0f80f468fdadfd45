"""
Service layer abstraction.

Services encapsulate the business logic and the storage access for a
domain so that API handlers stay thin.
"""
