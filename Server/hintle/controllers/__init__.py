"""
Controllers Package

Contains the HTTP blueprints.
"""
