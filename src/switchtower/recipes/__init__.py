"""Built-in recipes, addressable by bare name from ``--recipe``."""
