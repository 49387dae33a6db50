from .registry import FUNCTIONS, FUNCTION_REGISTRY, FUNCTION_SIG, call, lookup

__all__ = ["FUNCTIONS", "FUNCTION_REGISTRY", "FUNCTION_SIG", "call", "lookup"]
