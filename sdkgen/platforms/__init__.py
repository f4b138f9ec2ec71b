"""Registry of target languages."""

from __future__ import annotations

from ..errors import UnknownPlatformError
from .base import PlatformGenerator, ResourcePlatformGenerator
from .python import PythonGenerator
from .typescript import TypescriptGenerator

PLATFORMS: dict[str, type[PlatformGenerator]] = {
    TypescriptGenerator.name: TypescriptGenerator,
    PythonGenerator.name: PythonGenerator,
}


def available_platforms() -> list[str]:
    return sorted(PLATFORMS)


def create_platform(name: str, **options) -> PlatformGenerator:
    """Instantiate the generator registered under `name`."""
    platform = PLATFORMS.get(name)
    if platform is None:
        raise UnknownPlatformError(name)
    return platform(**options)


__all__ = [
    "PLATFORMS",
    "PlatformGenerator",
    "PythonGenerator",
    "ResourcePlatformGenerator",
    "TypescriptGenerator",
    "available_platforms",
    "create_platform",
]
