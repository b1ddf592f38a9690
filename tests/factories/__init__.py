from .pins import T0, SequentialIds, StepClock, make_pin, make_poi, memory_settings

__all__ = ["T0", "SequentialIds", "StepClock", "make_pin", "make_poi", "memory_settings"]
