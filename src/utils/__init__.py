"""
Utility modules for the radar loop viewer
"""
