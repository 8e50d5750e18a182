"""Query subcommands."""
