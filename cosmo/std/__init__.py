from .numeric import populate_numeric_environment

__all__ = ['populate_numeric_environment']
