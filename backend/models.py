"""Pydantic models for request/response validation."""

from typing import Annotated

from pydantic import BaseModel, Field, field_validator

from services import nfs_options
from services.nfs_options import Option


# --- Error ---


class ErrorResponse(BaseModel):
    error: str


# --- Exports ---

# Option values end up inside "-o a,b=v1:v2": no commas, colons or whitespace.
OptionValue = Annotated[str, Field(pattern=r"^[^\s,:]*$")]
RequiredOptionValue = Annotated[str, Field(pattern=r"^[^\s,:]+$")]


class ExportRemoveRequest(BaseModel):
    path: str = Field(..., pattern=r"^/\S*$", description="Absolute path on the server")
    host: str = Field(..., pattern=r"^[^\s,\-][^\s,]*$", description="Client: hostname, IP, network or wildcard")


class ExportCreateRequest(ExportRemoveRequest):
    flags: list[str] = Field(default_factory=list, description="Zero-argument options, e.g. ['rw', 'sync']")
    mountpoint: OptionValue | None = Field(None, description="'' requires the export point itself to be a mountpoint")
    fsid: RequiredOptionValue | None = None
    refer: list[OptionValue] = Field(default_factory=list)
    replicas: list[OptionValue] = Field(default_factory=list)
    anonuid: int | None = Field(None, ge=0)
    anongid: int | None = Field(None, ge=0)

    @field_validator("flags")
    @classmethod
    def known_flags(cls, flags: list[str]) -> list[str]:
        unknown = [f for f in flags if f not in nfs_options.FLAGS]
        if unknown:
            raise ValueError(f"Unknown export option(s): {', '.join(unknown)}")
        return flags

    def to_options(self) -> list[Option]:
        """Options in a stable order: flags as given, then the parameterized ones."""
        options = [nfs_options.FLAGS[f] for f in self.flags]
        if self.mountpoint is not None:
            options.append(nfs_options.mount_point(self.mountpoint))
        if self.fsid is not None:
            options.append(nfs_options.fsid(self.fsid))
        if self.refer:
            options.append(nfs_options.refer(*self.refer))
        if self.replicas:
            options.append(nfs_options.replicas(*self.replicas))
        if self.anonuid is not None:
            options.append(nfs_options.anon_uid(self.anonuid))
        if self.anongid is not None:
            options.append(nfs_options.anon_gid(self.anongid))
        return options


class ExportResponse(BaseModel):
    message: str
    command: list[str]
