"""
Theme / project metadata and derived theme analysis
"""

from typing import List, Optional
from pydantic import BaseModel, Field


class Theme(BaseModel):
    """Brand theme (read-only collaborator data)"""
    id: Optional[str] = None
    name: str = ""
    tags: List[str] = Field(default_factory=list)
    inspirations: List[str] = Field(default_factory=list)
    font: Optional[str] = None


class Project(BaseModel):
    """Project the content is generated for (read-only collaborator data)"""
    id: Optional[str] = None
    name: str = ""
    description: Optional[str] = None
    goals: Optional[str] = None
    customer_type: Optional[str] = None


class ColorPalette(BaseModel):
    primary: List[str] = Field(default_factory=list)
    secondary: List[str] = Field(default_factory=list)
    accent: List[str] = Field(default_factory=list)
    mood: str = "neutral"


class ThemeAnalysis(BaseModel):
    """Derived brand characteristics of a theme"""
    color_palette: ColorPalette = Field(default_factory=ColorPalette)
    style_score: int = 50
    dominant_styles: List[str] = Field(default_factory=list)
    visual_mood: str = "balanced"
    complexity_score: int = 50
    brand_strength: int = 50

    @classmethod
    def neutral(cls) -> "ThemeAnalysis":
        """Fallback used when analysis fails"""
        return cls()
