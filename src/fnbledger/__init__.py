"""Fnbledger - daily food and beverage totals for a hotel."""

__version__ = "0.1.0"


# Import main lazily so the engine can be used without click loaded
def __getattr__(name):
    if name == "main":
        from fnbledger.cli.main import main
        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
