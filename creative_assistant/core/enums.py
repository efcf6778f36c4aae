"""
Enumerations shared across the Creative Assistant.
"""

from enum import Enum


class MediaType(Enum):
    """Media types offered by the assessment form."""
    
    FILM = "film"
    SHORT_FILM = "short-film"
    AD_SPOT = "ad-spot"
    GENERAL_VIDEO_CONTENT = "general-video-content"
    MOTION_VIDEO = "motion-video"
    ANIMATION = "animation"
    DOCUMENTARY = "documentary"
    MUSIC_VIDEO = "music-video"
    PHOTOGRAPHY = "photography"
    FINE_ART = "fine-art"
    OTHER = "other"


class OperationKind(Enum):
    """Kinds of user-initiated operations tracked by the session layer."""
    
    IDEAS = "ideas"
    IMAGE = "image"
    SCRIPT = "script"
    ASSESSMENT = "assessment"
    DESIGN_ASSESSMENT = "design_assessment"


class OperationStatus(Enum):
    """Lifecycle of a single operation for one target."""
    
    IDLE = "idle"
    IN_FLIGHT = "in-flight"
    SUCCESS = "success"
    FAILED = "failed"
