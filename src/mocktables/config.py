import structlog
import pydantic
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["debug", "info", "warning", "error", "critical"]


class Config(BaseSettings):
    database_path: str | None = pydantic.Field(
        None,
        description="Dotted path to a Database instance.",
    )
    log_level: LogLevel = pydantic.Field(
        "info",
        description="Logging level.",
    )
    log_file: str = pydantic.Field(
        "STDOUT",
        description="Path to the log file.",
    )
    log_format: Literal["text", "json"] = pydantic.Field(
        "text",
        description="Log format, text or json.",
    )
    model_config = SettingsConfigDict(env_prefix="mocktables_")

    @pydantic.field_validator("log_level", "log_format", mode="before")
    @classmethod
    def _lowercase(cls, value):
        return value.lower() if isinstance(value, str) else value


def load_config(**overrides):
    config = Config(**overrides)
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(),
    ]
    if config.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    if config.log_file == "STDOUT":
        factory = structlog.PrintLoggerFactory()
    else:
        factory = structlog.PrintLoggerFactory(file=open(config.log_file, "a"))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(config.log_level),
        logger_factory=factory,
    )
    return config
