from .pressure_engine import assess, compute_pressure
from .dispatcher import DispatcherState, RequestDispatcher

__all__ = [
    "assess",
    "compute_pressure",
    "DispatcherState",
    "RequestDispatcher",
]
