"""Command line interface for inspecting setup registries."""
