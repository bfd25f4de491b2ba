"""Window size constraint keeping the editor's aspect ratio."""

from __future__ import annotations


class AspectRatioDownscaleConstrainer:
    """Limits a size to half..double the original size at the original aspect ratio."""

    def __init__(self, original_width: int, original_height: int) -> None:
        if original_width <= 0 or original_height <= 0:
            raise ValueError(
                f"original size must be positive, got {original_width}x{original_height}"
            )
        self.original_width = original_width
        self.original_height = original_height
        self.aspect_ratio = original_width / original_height

    def check_bounds(self, width: int, height: int) -> tuple[int, int]:
        """Return the permitted (width, height) closest to the requested size."""
        min_width, min_height = self.original_width // 2, self.original_height // 2
        max_width, max_height = self.original_width * 2, self.original_height * 2

        width = max(min_width, min(width, max_width))
        height = max(min_height, min(height, max_height))

        current_ratio = width / height
        if current_ratio > self.aspect_ratio:
            width = round(height * self.aspect_ratio)
        elif current_ratio < self.aspect_ratio:
            height = round(width / self.aspect_ratio)
        return width, height