"""
Core infrastructure: configuration, logging, storage, caching and the
error taxonomy shared by services and endpoints.
"""
