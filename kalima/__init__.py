"""
Kalima Backend Application Package
"""
