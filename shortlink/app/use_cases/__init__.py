"""
Use Cases

Organized by domain folder:
- auth/: Login, logout, token bookkeeping
- accounts/: Account administration
- links/: Link administration and resolution
"""
