"""Adapter configuration consumed at construction time."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from bucketfs.objectstorage.clients import S3ClientConfig


class AdapterConfig(BaseModel):
    """Configuration for an object storage adapter."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    bucket: str = Field(..., min_length=1, description="Bucket name")
    prefix: Optional[str] = Field(
        default=None, description="Root prefix applied to every path"
    )
    default_options: dict[str, Any] = Field(
        default_factory=dict, description="Request options applied to every call"
    )
    client: S3ClientConfig = Field(
        default_factory=S3ClientConfig, description="S3 connection settings"
    )
