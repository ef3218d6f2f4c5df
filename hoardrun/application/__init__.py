"""
Application layer.

Use cases orchestrating domain logic, one class per operation with a
single public `execute` method. Depends on domain ports only.
"""
