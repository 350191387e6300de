"""TaskFlow backend package.

Ensures the local ``app`` package takes precedence over similarly named
modules that might be installed in the environment.
"""
