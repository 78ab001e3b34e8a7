"""Infrastructure layer: filesystem access and the manifest workspace.

Infrastructure turns settings into a loaded :class:`SubmoduleFile` and
writes the result back.  It must never import from services, commands,
or output.
"""
