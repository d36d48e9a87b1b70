"""Interactive tile calculator built on prompt_toolkit."""
