"""Duofin - aggregation and projection engine for shared household finances."""

__version__ = "0.1.0"


# Import main lazily so importing the domain layer does not require click
def __getattr__(name):
    if name == "main":
        from duofin.cli.main import main
        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
