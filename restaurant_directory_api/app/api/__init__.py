"""
HTTP layer: versioned routers and the dependencies they share.
"""
