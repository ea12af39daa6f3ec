# ABOUTME: shipyard package root
# ABOUTME: Namespaced command routing and shell completion for the shipyard CLI

"""Namespaced command routing and shell completion for the shipyard CLI."""

__version__ = "1.0.0"
