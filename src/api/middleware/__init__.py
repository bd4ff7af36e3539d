"""
API Middleware - error handling for the viewer API
"""
