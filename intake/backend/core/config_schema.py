"""
Configuration Schemas.

Pydantic models defining the expected structure of each YAML config file.
Used by AppConfig to validate configuration at load time. If a YAML file
has missing keys, wrong types, or unknown fields, a clear ValidationError
is raised at startup instead of a cryptic KeyError deep in application code.

Each top-level class corresponds to one file in config/settings/:
    ApplicationSchema  → application.yaml
    LoggingSchema      → logging.yaml
    FeaturesSchema     → features.yaml
    FormsSchema        → forms.yaml
    DeliverySchema     → delivery.yaml
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# application.yaml
# =============================================================================


class ServerSchema(_StrictBase):
    host: str
    port: int


class CorsSchema(_StrictBase):
    origins: list[str]


class TimeoutsSchema(_StrictBase):
    external_api: float | None = None


class StaticSchema(_StrictBase):
    enabled: bool
    directory: str


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str
    environment: str
    debug: bool
    api_prefix: str
    docs_enabled: bool
    server: ServerSchema
    cors: CorsSchema
    timeouts: TimeoutsSchema
    static: StaticSchema


# =============================================================================
# logging.yaml
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int
    backup_count: int


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: str
    format: Literal["json", "console"]
    handlers: HandlersSchema


# =============================================================================
# features.yaml
# =============================================================================


class FeaturesSchema(_StrictBase):
    api_detailed_errors: bool
    api_request_logging: bool
    page_cancellation_enabled: bool
    page_refund_enabled: bool


# =============================================================================
# forms.yaml
# =============================================================================


ValidationPolicyName = Literal["all_fields", "required_fields", "accept_all"]


class SessionsSchema(_StrictBase):
    max_pages: int = Field(gt=0)


class NoticeSchema(_StrictBase):
    title: str
    message: str
    follow_up: str


class CancellationPageSchema(_StrictBase):
    validation_policy: ValidationPolicyName
    notice: NoticeSchema


class RefundPageSchema(_StrictBase):
    validation_policy: ValidationPolicyName
    delivery_mode: Literal["disabled", "gated"]
    allow_submit_another: bool
    include_specialist: bool


class FormsSchema(_StrictBase):
    sessions: SessionsSchema
    cancellation: CancellationPageSchema
    refund: RefundPageSchema


# =============================================================================
# delivery.yaml
# =============================================================================


class DeliverySchema(_StrictBase):
    source: Literal["http", "file"]
    path: str
    api_base: str
    parse_mode: str
    default_key: str
