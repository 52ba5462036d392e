"""
Transport parameters: protocols, open arguments and address resolution with fallback.
"""
