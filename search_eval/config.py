"""
Configuration management for search settings, MCP server settings and command-line arguments.
"""

import argparse
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from search_eval.packages.search_service import DEFAULT_SEARCH_LIMIT, RetrievalScheme


class Transport(str, Enum):
    STDIO = "stdio"
    SSE = "sse"
    STREAMABLE_HTTP = "streamable-http"


class Config(BaseSettings):
    model_config = SettingsConfigDict(populate_by_name=True)

    host: str = Field("0.0.0.0", alias="MCP_HOST", description="Host to bind")
    port: int = Field(8000, alias="MCP_PORT", description="Port to listen on")
    transport: Transport = Field(
        Transport.STREAMABLE_HTTP,
        description=f"Transport protocol, allowed: {[t.value for t in Transport]}"
    )
    log_level: str = Field('INFO', description="Logging level",
                           examples=["CRITICAL", "FATAL", "ERROR", "WARNING", "INFO", "DEBUG"])
    corpus_path: Optional[str] = Field(None, alias="CORPUS_PATH",
                                       description="Path to the XML document collection")
    task_number: int = Field(9, alias="TASK_NUMBER", description="Search task to restrict queries to")
    scheme: RetrievalScheme = Field(
        RetrievalScheme.VSM_STOP,
        alias="RETRIEVAL_SCHEME",
        description=f"Retrieval scheme, allowed: {[s.value for s in RetrievalScheme]}"
    )
    search_limit: int = Field(DEFAULT_SEARCH_LIMIT, alias="SEARCH_LIMIT", ge=1,
                              description="Maximum number of results per query")
    runs_dir: str = Field("evaluation/runs", alias="RUNS_DIR",
                          description="Directory where experiments are saved")

    @field_validator("transport")
    def reject_sse(cls, v):
        if v == Transport.SSE:
            raise ValueError("SSE transport not supported")
        return v


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments for the MCP server."""
    parser = argparse.ArgumentParser(description="Search evaluation MCP server")

    # Transport options
    parser.add_argument(
        "--transport",
        choices=["stdio", "streamable-http"],
        help="Transport protocol to use",
    )

    # HTTP transport configuration
    parser.add_argument(
        "--host",
        help="Host to bind to for HTTP transports (default: 0.0.0.0, env: MCP_HOST)",
    )

    parser.add_argument(
        "--port",
        type=int,
        help="Port to listen on for HTTP transports",
    )

    # Search options
    parser.add_argument(
        "--corpus",
        dest="corpus_path",
        help="Path to the XML document collection (env: CORPUS_PATH)",
    )

    parser.add_argument(
        "--task",
        dest="task_number",
        type=int,
        help="Search task to restrict queries to (default: 9, env: TASK_NUMBER)",
    )

    parser.add_argument(
        "--scheme",
        choices=[s.value for s in RetrievalScheme],
        help="Retrieval scheme (env: RETRIEVAL_SCHEME)",
    )

    # Optional log level
    parser.add_argument(
        "--log-level",
        help="Logging level",
    )

    args = parser.parse_args(argv)

    return args


def get_config(argv=None) -> Config:
    args = parse_args(argv)
    # Only include CLI values that are actually set
    cli_overrides = {k: v for k, v in vars(args).items() if v is not None}
    return Config(**cli_overrides)
