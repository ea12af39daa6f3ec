"""Built-in shipyard commands."""
