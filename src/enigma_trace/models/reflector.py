from __future__ import annotations

from enigma_trace.models.catalog import ReflectorType, reflector_spec


class Reflector:
    """Fixed reflector (Umkehrwalze) that sends the signal back through the rotors."""

    def __init__(self, reflector_type: str | ReflectorType = ReflectorType.B):
        spec = reflector_spec(reflector_type)
        self.reflector_type = spec.reflector_type
        self._wiring = spec.wiring

    @property
    def label(self) -> str:
        return f"Reflector {self.reflector_type}"

    def reflect(self, index: int) -> int:
        return self._wiring[index]

    def __repr__(self) -> str:
        return f"<Reflector {self.reflector_type}>"
