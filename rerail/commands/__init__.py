"""
Commands Package.

This package contains the command classes implementing the Command pattern
for map edits. Each command applies one mutation to an immutable map snapshot
and reports the outcome as a CommandResult.
"""
