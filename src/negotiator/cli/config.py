"""Configuration management for the CLI tool."""

from pydantic import BaseModel, Field


class CLIConfig(BaseModel):
    """CLI configuration settings."""

    host: str = Field(
        default="localhost",
        description="Server host",
    )
    port: int = Field(
        default=8000,
        description="Server port",
    )
    api_prefix: str = Field(
        default="/api",
        description="Path prefix of the negotiator API",
    )
    timeout: float = Field(
        default=300.0,
        description="Request timeout in seconds",
    )

    @property
    def base_url(self) -> str:
        """Get the base URL for the API."""
        return f"http://{self.host}:{self.port}"

    @property
    def carriers_url(self) -> str:
        return f"{self.base_url}{self.api_prefix}/carriers"

    @property
    def chat_url(self) -> str:
        return f"{self.base_url}{self.api_prefix}/rates-negotiation-chat"
