__version__ = "0.1.0"

from polycalc.factory import create_calculator  # noqa: E402

__all__ = ["create_calculator", "__version__"]
