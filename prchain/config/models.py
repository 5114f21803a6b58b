"""Pydantic models for config types."""

from pydantic import BaseModel, Field

class RepoConfig(BaseModel):
    """Repository configuration."""
    trunk: str = "main"
    fetch: bool = True  # Fetch all remotes before resolving the stack

    class Config:
        """Pydantic config."""
        extra = "allow"  # Allow extra fields

class UserConfig(BaseModel):
    """User configuration."""
    color: bool = True

    class Config:
        """Pydantic config."""
        extra = "allow"  # Allow extra fields

class ToolConfig(BaseModel):
    """Tool configuration."""
    concurrency: int = 0  # Parallel remote fetches, 0 = one at a time

    class Config:
        """Pydantic config."""
        extra = "allow"  # Allow extra fields

class PrchainConfig(BaseModel):
    """Full prchain configuration."""
    repo: RepoConfig = Field(default_factory=RepoConfig)
    user: UserConfig = Field(default_factory=UserConfig)
    tool: ToolConfig = Field(default_factory=ToolConfig)

    class Config:
        """Pydantic config."""
        extra = "allow"  # Allow extra fields
