"""Configuration schema definitions using Pydantic"""

from typing import Optional, Literal, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


MIN_STATUS_CODE = 200
MAX_STATUS_CODE = 599


class FailureCycleConfig(BaseModel):
    """Transient failure simulation settings"""
    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    failure_count: int = Field(default=0, ge=0, description="Consecutive failure responses per cycle")
    success_count: int = Field(default=0, ge=0, description="Consecutive success responses per cycle")
    failure_code: int = Field(
        default=503, ge=MIN_STATUS_CODE, le=MAX_STATUS_CODE,
        description="Status code returned during the failure phase",
    )
    success_code: int = Field(
        default=200, ge=MIN_STATUS_CODE, le=MAX_STATUS_CODE,
        description="Status code returned during the success phase",
    )

    @property
    def is_degenerate(self) -> bool:
        """Enabled, but neither phase has any responses to serve"""
        return self.enabled and self.failure_count == 0 and self.success_count == 0


class ResponseConfig(BaseModel):
    """Response behavior outside of the failure cycle"""
    model_config = ConfigDict(frozen=True)

    code: int = Field(
        default=200, ge=MIN_STATUS_CODE, le=MAX_STATUS_CODE,
        description="Default status code (used when failure simulation is off)",
    )
    delay_ms: int = Field(default=0, ge=0, description="Fixed delay before responding, in ms")
    echo: bool = Field(default=False, description="Echo the request body in the response")


class LoggingConfig(BaseModel):
    """Request log and diagnostics settings"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    json_format: bool = Field(default=False, alias="json", description="Log requests as JSON")
    pretty: bool = Field(default=False, description="Pretty-print JSON request logs")
    output: Optional[str] = Field(default=None, description="Request log file (stdout when unset)")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        """Accept lowercase level names"""
        if isinstance(v, str):
            return v.upper()
        return v

    @model_validator(mode="before")
    @classmethod
    def pretty_implies_json(cls, data):
        """Pretty output is always JSON"""
        if isinstance(data, dict) and data.get("pretty"):
            data = {k: v for k, v in data.items() if k != "json_format"}
            data["json"] = True
        return data


class HttprConfig(BaseModel):
    """Root configuration model"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    version: str = "1.0"
    listen: str = Field(default="localhost:8080", description="host:port to listen on")
    response: ResponseConfig = Field(default_factory=ResponseConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    failure_mode: FailureCycleConfig = Field(default_factory=FailureCycleConfig)

    @field_validator("listen", mode="before")
    @classmethod
    def validate_listen(cls, v):
        """Require host:port with a valid port; an empty host means all interfaces"""
        if isinstance(v, int):
            v = f":{v}"
        if not isinstance(v, str):
            raise ValueError("listen must be a 'host:port' string")
        host, sep, port = v.strip().rpartition(":")
        if not sep:
            raise ValueError(f"listen address '{v}' must be in 'host:port' form")
        if not port.isdigit() or not 0 < int(port) < 65536:
            raise ValueError(f"invalid port in listen address '{v}'")
        return f"{host}:{int(port)}"

    @property
    def address(self) -> Tuple[str, int]:
        host, _, port = self.listen.rpartition(":")
        # [::1]:8080 binds to ::1
        host = host.strip("[]")
        return (host or "0.0.0.0"), int(port)

    @property
    def host(self) -> str:
        return self.address[0]

    @property
    def port(self) -> int:
        return self.address[1]
