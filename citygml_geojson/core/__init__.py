"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Named constants, file layout, cartographic definitions
- exceptions: Custom exception hierarchy
"""
