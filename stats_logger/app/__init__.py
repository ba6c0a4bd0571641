from .master import main, run

__all__ = ["main", "run"]
