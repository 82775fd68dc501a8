"""
High-level use cases for the users API.

Service modules orchestrate the store and the domain rules; routers call these
services instead of reading or writing the users file directly.
"""
