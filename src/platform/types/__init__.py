from src.platform.types.clock import Clock, facility_clock

__all__ = ['Clock', 'facility_clock']
