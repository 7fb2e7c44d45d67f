import yaml
from pathlib import Path
from pydantic import BaseModel, ConfigDict
from typing import Dict, Optional, Union

from c4arena.core.config import get_personality_config_path
from c4arena.models.enums import BotPersonality


class PersonalityConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    description: str = ""
    offensive_weight: float = 0.0
    defensive_weight: float = 0.0
    center_weight: float = 0.0
    fork_weight: float = 0.0
    parity_weight: float = 0.0
    zugzwang_penalty: float = 0.0


class PersonalityRegistry:
    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        self.personalities: Dict[BotPersonality, PersonalityConfig] = {}
        self.center_k: float = 1.0
        self._load(Path(config_path) if config_path else get_personality_config_path())

    def _load(self, path: Path):
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        self.center_k = float(data.get("center_k", 1.0))
        for key, val in data.get("personalities", {}).items():
            self.personalities[BotPersonality(key)] = PersonalityConfig(**(val or {}))

        missing = [p.value for p in BotPersonality if p not in self.personalities]
        if missing:
            raise ValueError(f"{path} has no settings for: {', '.join(missing)}")

    def get(self, personality: BotPersonality) -> PersonalityConfig:
        return self.personalities[BotPersonality(personality)]

    def list_all(self) -> Dict[BotPersonality, PersonalityConfig]:
        return dict(self.personalities)


_registry: Optional[PersonalityRegistry] = None


def get_registry() -> PersonalityRegistry:
    """Shared instance, loaded on first use."""
    global _registry
    if _registry is None:
        _registry = PersonalityRegistry()
    return _registry
