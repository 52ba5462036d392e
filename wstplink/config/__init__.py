"""
Layered configuration files applied to module globals.
"""
