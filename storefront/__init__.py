"""
Storefront admin: typed RPC service for users, categories, products,
orders and order items.
"""

__version__ = "0.1.0"
