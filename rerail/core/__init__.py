"""
Core Package.

Editor logic that needs no widgets: coordinates, tool modes, the interaction
state machine and the reference map engine.
"""
