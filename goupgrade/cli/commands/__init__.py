"""Command modules for the goupgrade CLI; each exposes ``run(args) -> int``."""
