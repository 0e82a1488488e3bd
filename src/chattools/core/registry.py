"""Model key -> maximum context units."""

from typing import Dict, Iterator, Mapping, Optional, Tuple

from .errors import ConfigurationError

DEFAULT_MODEL_LIMITS: Dict[str, int] = {
    "gpt4-8k": 8000,
    "gpt4-32k": 32000,
    "gpt5-40k": 40000,
    "gpt4turbo-128k": 128000,
    # Friendly aliases
    "go-gpt5": 40000,
    "plus-gpt4": 32000,
    "plus-gpt5": 40000,
}


class ModelRegistry:
    """Lookup of model limits; keys are matched case-insensitively."""

    def __init__(self, limits: Optional[Mapping[str, int]] = None):
        source = DEFAULT_MODEL_LIMITS if limits is None else limits
        self._limits = {key.lower(): int(value) for key, value in source.items()}

    @classmethod
    def with_extra(cls, extra: Mapping[str, int]) -> "ModelRegistry":
        """Defaults merged with configured models (configured wins)."""
        merged = dict(DEFAULT_MODEL_LIMITS)
        merged.update({key.lower(): value for key, value in extra.items()})
        return cls(merged)

    def keys(self) -> list[str]:
        return list(self._limits)

    def max_units(self, model_key: str) -> int:
        try:
            return self._limits[model_key.lower()]
        except KeyError:
            raise ConfigurationError(
                f"Unknown model key: {model_key!r}; supported: {', '.join(self._limits)}"
            ) from None

    def __contains__(self, model_key: object) -> bool:
        return isinstance(model_key, str) and model_key.lower() in self._limits

    def __iter__(self) -> Iterator[Tuple[str, int]]:
        return iter(self._limits.items())
