"""Base for editor components that draw images from the selected skin."""

from __future__ import annotations

from pathlib import Path

from obxf.library import PresetLibrary


class ScalableComponent:
    """A component that remembers its unscaled bounds and finds skin images."""

    def __init__(self, library: PresetLibrary | None = None) -> None:
        self.library = library
        self.original_bounds: tuple[int, int, int, int] = (0, 0, 0, 0)
        self._image_cache: dict[tuple[Path, str], Path] = {}

    def scale_factor_changed(self) -> None:
        """Forget cached image lookups so images are found afresh at the new scale."""
        self._image_cache.clear()

    def image_path(self, image_name: str) -> Path | None:
        """Return the path of ``image_name``.png in the current skin, or None if absent."""
        if self.library is None:
            return None
        skin = self.library.current_skin_folder()
        if not skin.is_dir():
            return None
        key = (skin, image_name)
        cached = self._image_cache.get(key)
        if cached is not None and cached.exists():
            return cached
        candidate = skin / f"{image_name}.png"
        if not candidate.exists():
            self._image_cache.pop(key, None)
            return None
        self._image_cache[key] = candidate
        return candidate