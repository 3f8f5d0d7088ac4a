"""toolenv CLI commands; each module exposes run(args) -> int."""
