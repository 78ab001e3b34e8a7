"""Domain layer: go.mod model, module paths, and submodule rules.

This layer depends only on the stdlib.
It must never import from services, infrastructure, commands, or config.
"""
