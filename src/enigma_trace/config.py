import json
from pathlib import Path
from typing import Any, Mapping, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from enigma_trace.alphabet import ALPHABET
from enigma_trace.errors import ConfigurationError
from enigma_trace.models.catalog import ReflectorType, RotorType


def _normalize_letter(value: Any) -> str:
    if not isinstance(value, str) or len(value.strip()) != 1 or value.strip().upper() not in ALPHABET:
        raise ValueError(f"expected a single letter A-Z, got {value!r}")
    return value.strip().upper()


class RotorSelection(BaseModel):
    """One rotor slot: which rotor, its starting window letter and its ring setting."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: RotorType = Field(validation_alias=AliasChoices("type", "name"))
    position: str = "A"
    ring: str = "A"

    @field_validator("type", mode="before")
    @classmethod
    def _lookup_type(cls, value: Any) -> RotorType:
        return RotorType.from_name(value)

    @field_validator("position", "ring", mode="before")
    @classmethod
    def _letter(cls, value: Any) -> str:
        return _normalize_letter(value)


class MachineConfiguration(BaseModel):
    """Full machine setup. Rotors are listed fast (right), middle, slow (left)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rotors: Tuple[RotorSelection, RotorSelection, RotorSelection]
    reflector: ReflectorType = ReflectorType.B
    plugboard_pairs: str = Field(default="", validation_alias=AliasChoices("plugboard_pairs", "plugboard"))

    @field_validator("reflector", mode="before")
    @classmethod
    def _lookup_reflector(cls, value: Any) -> ReflectorType:
        return ReflectorType.from_name(value)

    @classmethod
    def parse(cls, data: Mapping[str, Any]) -> "MachineConfiguration":
        """Validate external configuration data, raising ConfigurationError on any problem."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid machine configuration: {e}") from e

    @classmethod
    def default(cls) -> "MachineConfiguration":
        """Rotors I, II, III read left to right at AAA, so rotor III is the fast rotor."""
        return cls(
            rotors=(
                RotorSelection(type=RotorType.III),
                RotorSelection(type=RotorType.II),
                RotorSelection(type=RotorType.I),
            ),
        )

    @property
    def fast(self) -> RotorSelection:
        return self.rotors[0]

    @property
    def middle(self) -> RotorSelection:
        return self.rotors[1]

    @property
    def slow(self) -> RotorSelection:
        return self.rotors[2]


def load_configuration(file_path: str | Path) -> MachineConfiguration:
    """Load a machine configuration from a JSON file."""
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not read configuration from {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration in {file_path} must be a JSON object")
    return MachineConfiguration.parse(data)
