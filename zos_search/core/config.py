"""
Configuration management for z/OS data set search
"""
import os
from typing import Optional
from pydantic import BaseModel, Field


class ZosmfConfig(BaseModel):
    """Connection settings for a z/OSMF instance"""
    host: str = "localhost"
    port: int = Field(default=443, ge=1, le=65535)
    protocol: str = Field(default="https", pattern="^https?$")
    user: Optional[str] = None
    password: Optional[str] = None
    base_path: str = ""
    reject_unauthorized: bool = True
    request_timeout: int = 60  # seconds

    @property
    def base_url(self) -> str:
        return f"{self.protocol}://{self.host}:{self.port}{self.base_path.rstrip('/')}"


class SearchConfig(BaseModel):
    """Default settings for search operations"""
    max_concurrent_requests: int = Field(default=1, ge=0)
    timeout: Optional[int] = None  # seconds
    case_sensitive: bool = False
    mainframe_search: bool = False


class Config(BaseModel):
    """Main configuration class"""
    zosmf: ZosmfConfig = Field(default_factory=ZosmfConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from environment variables"""
        return cls(
            zosmf=ZosmfConfig(
                host=os.getenv("ZOSMF_HOST", "localhost"),
                port=int(os.getenv("ZOSMF_PORT", "443")),
                protocol=os.getenv("ZOSMF_PROTOCOL", "https"),
                user=os.getenv("ZOSMF_USER"),
                password=os.getenv("ZOSMF_PASSWORD"),
                base_path=os.getenv("ZOSMF_BASE_PATH", ""),
                reject_unauthorized=os.getenv("ZOSMF_REJECT_UNAUTHORIZED", "true").lower() != "false"
            )
        )

    @classmethod
    def load_from_file(cls, file_path: str) -> "Config":
        """Load configuration from JSON file"""
        import json
        with open(file_path, 'r') as f:
            data = json.load(f)
        return cls(**data)

    def save_to_file(self, file_path: str) -> None:
        """Save configuration to JSON file"""
        import json
        with open(file_path, 'w') as f:
            json.dump(self.model_dump(), f, indent=2)
