"""
Domain layer.

Pure business rules: entities, value objects, errors and ports.
No framework imports and no IO.
"""
