"""
Configuration for the Creative Assistant.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


SUPPORTED_ASPECT_RATIOS = ("1:1", "3:4", "4:3", "9:16", "16:9")


@dataclass
class AssistantConfig:
    """Runtime configuration for models, prompts and local persistence."""
    
    text_model: str = "gemini-2.5-flash"
    image_model: str = "imagen-4.0-generate-001"
    output_language: str = "Thai"  # Language the AI service must answer in
    idea_count: int = 3
    image_aspect_ratio: str = "9:16"
    image_mime_type: str = "image/jpeg"
    narration_lang: str = "th-TH"
    storage_dir: Path = field(default_factory=lambda: Path(".creative_assistant"))
    activity_log_url: Optional[str] = None
    activity_log_timeout: float = 10.0
    
    def __post_init__(self):
        """Validate configuration values."""
        self.storage_dir = Path(self.storage_dir)
        if self.idea_count < 1:
            raise ValueError("idea_count must be at least 1")
        if self.image_aspect_ratio not in SUPPORTED_ASPECT_RATIOS:
            raise ValueError(
                f"image_aspect_ratio must be one of {SUPPORTED_ASPECT_RATIOS}, "
                f"got {self.image_aspect_ratio!r}"
            )
        if not self.image_mime_type.startswith("image/"):
            raise ValueError("image_mime_type must be an image/* content type")
        if self.activity_log_timeout <= 0:
            raise ValueError("activity_log_timeout must be positive")
    
    @classmethod
    def from_env(cls) -> "AssistantConfig":
        """
        Build a configuration from CREATIVE_ASSISTANT_* environment variables.
        
        Unset variables fall back to the dataclass defaults.
        """
        defaults = cls()
        return cls(
            text_model=os.getenv("CREATIVE_ASSISTANT_TEXT_MODEL", defaults.text_model),
            image_model=os.getenv("CREATIVE_ASSISTANT_IMAGE_MODEL", defaults.image_model),
            output_language=os.getenv("CREATIVE_ASSISTANT_LANGUAGE", defaults.output_language),
            idea_count=int(os.getenv("CREATIVE_ASSISTANT_IDEA_COUNT", defaults.idea_count)),
            image_aspect_ratio=os.getenv("CREATIVE_ASSISTANT_ASPECT_RATIO", defaults.image_aspect_ratio),
            narration_lang=os.getenv("CREATIVE_ASSISTANT_NARRATION_LANG", defaults.narration_lang),
            storage_dir=Path(os.getenv("CREATIVE_ASSISTANT_STORAGE_DIR", str(defaults.storage_dir))),
            activity_log_url=os.getenv("CREATIVE_ASSISTANT_ACTIVITY_LOG_URL") or None,
            activity_log_timeout=float(
                os.getenv("CREATIVE_ASSISTANT_ACTIVITY_LOG_TIMEOUT", defaults.activity_log_timeout)
            ),
        )
