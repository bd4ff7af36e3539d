"""
API Routes - HTTP endpoint handlers

Each area (viewer, system) gets its own router, included by create_app().
"""
