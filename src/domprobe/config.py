import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from .providers.doh import DOH_ENDPOINTS

DEFAULT_TIMEOUT_MS = 5000
DEFAULT_DELAY = 0.5


@dataclass
class Settings:
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    delay: float = DEFAULT_DELAY
    endpoints: Tuple[str, ...] = field(default_factory=lambda: tuple(DOH_ENDPOINTS))


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Lit DOMPROBE_TIMEOUT_MS, DOMPROBE_DELAY et DOMPROBE_ENDPOINTS.
    Une valeur numérique invalide lève ValueError.
    """
    if env is None:
        env = os.environ

    settings = Settings()

    raw = env.get("DOMPROBE_TIMEOUT_MS", "").strip()
    if raw:
        settings.timeout_ms = int(raw)
        if settings.timeout_ms <= 0:
            raise ValueError(f"DOMPROBE_TIMEOUT_MS doit être positif: {raw}")

    raw = env.get("DOMPROBE_DELAY", "").strip()
    if raw:
        settings.delay = float(raw)
        if settings.delay < 0:
            raise ValueError(f"DOMPROBE_DELAY ne peut pas être négatif: {raw}")

    raw = env.get("DOMPROBE_ENDPOINTS", "").strip()
    if raw:
        endpoints = tuple(e.strip() for e in raw.split(",") if e.strip())
        if endpoints:
            settings.endpoints = endpoints

    return settings
