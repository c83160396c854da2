"""Routing — compiled path patterns, route trees and hierarchical selection.

Route trees are assembled during setup and read-only once selection
starts.
"""
