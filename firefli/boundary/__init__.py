"""
Boundary layer.

Adapters to the outside world: the relational database and the
Discord/Roblox HTTP APIs.
"""
